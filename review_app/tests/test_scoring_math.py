import pytest

from review_app.services.numbers import round1
from review_app.services.scoring_math import score_target


class TestRounding:
    @pytest.mark.parametrize("value, expected", [
        (2.25, 2.3),
        (2.35, 2.4),
        (-1.25, -1.3),
        (8 / 3, 2.7),
        (4.0, 4.0),
    ])
    def test_half_away_from_zero(self, value, expected):
        assert round1(value) == expected


class TestScoreTarget:
    def test_weighted_overall_average(self, make_coefficients, make_evaluation):
        coeffs = make_coefficients({"self": 1.0, "peer": 1.0, "manager": 2.0})
        evals = [
            make_evaluation(4.0, level="peer"),
            make_evaluation(2.0, level="manager"),
        ]
        result = score_target(evals, coeffs)
        # (1*4 + 2*2) / 3
        assert result.overall_avg == 2.7
        # display figure stays unweighted
        assert result.peer_avg == 3.0

    def test_acme_scenario(self, make_coefficients, make_evaluation):
        coeffs = make_coefficients({"self": 1.0, "peer": 1.0})
        evals = [
            make_evaluation(4.0, is_self=True, evaluator_id="T1"),
            make_evaluation(3.0, level="peer"),
            make_evaluation(5.0, level="peer"),
        ]
        result = score_target(evals, coeffs, target_id="T1")
        assert result.self_score == 4.0
        assert result.peer_avg == 4.0
        assert result.overall_avg == 4.0
        assert result.evaluator_count == 3
        assert result.peer_completed_count == 2

    def test_unknown_level_falls_back_to_peer_weight(self, make_coefficients, make_evaluation):
        coeffs = make_coefficients({"self": 1.0, "peer": 3.0})
        evals = [
            make_evaluation(1.0, is_self=True),
            make_evaluation(5.0, level="intern"),
        ]
        # (1*1 + 3*5) / 4
        assert score_target(evals, coeffs).overall_avg == 4.0

    def test_zero_weight_sum_gives_zero(self, make_coefficients, make_evaluation):
        coeffs = make_coefficients({"self": 0.0, "peer": 0.0})
        evals = [make_evaluation(4.0), make_evaluation(3.0, is_self=True)]
        assert score_target(evals, coeffs).overall_avg == 0.0

    def test_no_data_evaluation_is_ignored(self, make_coefficients, make_evaluation):
        coeffs = make_coefficients()
        evals = [make_evaluation(4.0), make_evaluation(0.0)]
        result = score_target(evals, coeffs)
        assert result.peer_avg == 4.0
        assert result.overall_avg == 4.0

    def test_missing_self_evaluation(self, make_coefficients, make_evaluation):
        result = score_target([make_evaluation(3.0)], make_coefficients())
        assert result.self_score == 0.0


class TestCategoryCompare:
    def test_gap_sign(self, make_coefficients, make_evaluation):
        evals = [
            make_evaluation(3.0, is_self=True, categories={"Leadership": 4.0, "Communication": 2.0}),
            make_evaluation(3.2, categories={"Leadership": 3.0, "Communication": 3.5}),
        ]
        rows = {c.name: c for c in score_target(evals, make_coefficients()).category_compare}
        assert rows["Leadership"].diff == 1.0
        assert rows["Communication"].diff == -1.5

    def test_category_weight_is_informational(self, make_coefficients, make_evaluation):
        coeffs = make_coefficients(category_weights={"Leadership": 2.5})
        evals = [
            make_evaluation(4.0, is_self=True, categories={"Leadership": 4.0}),
            make_evaluation(3.0, categories={"Leadership": 3.0}),
        ]
        row = score_target(evals, coeffs).category_compare[0]
        assert row.weight == 2.5
        assert (row.self_score, row.peer_score, row.diff) == (4.0, 3.0, 1.0)

    def test_category_without_scores_is_absent(self, make_coefficients, make_evaluation):
        evals = [make_evaluation(4.0, categories={"Leadership": 4.0, "Ethics": 0.0})]
        names = [c.name for c in score_target(evals, make_coefficients()).category_compare]
        assert names == ["Leadership"]

    def test_one_sided_category_counts_missing_side_as_zero(self, make_coefficients, make_evaluation):
        peer_only = score_target(
            [make_evaluation(4.0, categories={"Leadership": 4.0})], make_coefficients(),
        ).category_compare[0]
        assert (peer_only.self_score, peer_only.peer_score, peer_only.diff) == (0.0, 4.0, -4.0)

        self_only = score_target(
            [make_evaluation(4.0, is_self=True, evaluator_id="T1", categories={"Leadership": 4.0})],
            make_coefficients(),
        ).category_compare[0]
        assert (self_only.self_score, self_only.peer_score, self_only.diff) == (4.0, 0.0, 4.0)
        assert self_only.as_dict()["diff"] == 4.0

    def test_category_averages_include_self(self, make_coefficients, make_evaluation):
        evals = [
            make_evaluation(4.0, is_self=True, categories={"Leadership": 5.0}),
            make_evaluation(3.0, categories={"Leadership": 3.0}),
        ]
        assert score_target(evals, make_coefficients()).category_averages == (("Leadership", 4.0),)


def test_scoring_is_idempotent(make_coefficients, make_evaluation):
    coeffs = make_coefficients({"self": 1.0, "peer": 1.5})
    evals = [
        make_evaluation(4.0, is_self=True, categories={"A": 4.0, "B": 3.0}),
        make_evaluation(2.5, categories={"A": 2.0, "B": 3.0}),
        make_evaluation(3.5, categories={"A": 4.0, "B": 3.0}),
    ]
    first = score_target(evals, coeffs, target_id="x")
    second = score_target(evals, coeffs, target_id="x")
    assert first == second
    assert first.as_dict() == second.as_dict()
