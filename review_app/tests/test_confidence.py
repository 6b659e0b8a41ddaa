import pytest

from review_app.services.confidence import estimate_confidence


@pytest.mark.parametrize("count, label, coeff", [
    (5, "High", 1.0),
    (9, "High", 1.0),
    (3, "Medium", 0.9),
    (4, "Medium", 0.9),
    (2, "Low", 0.8),
    (0, "Low", 0.8),
])
def test_breakpoints_for_min_high_5(count, label, coeff):
    result = estimate_confidence(count, 5)
    assert (result.label, result.coeff) == (label, coeff)


def test_medium_floor_is_one():
    # ceil(1/2) = 1, so with min_high=1 one rater is already High
    assert estimate_confidence(1, 1).label == "High"
    assert estimate_confidence(0, 1).label == "Low"
    assert estimate_confidence(1, 2).label == "Medium"


def test_unset_min_high_uses_default():
    assert estimate_confidence(5, 0).label == "High"
    assert estimate_confidence(3, None).label == "Medium"
