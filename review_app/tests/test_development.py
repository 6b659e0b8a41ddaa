from review_app.services.development import build_development_plan
from review_app.services.scoring_math import CategoryComparison


def row(name, self_score, peer):
    return CategoryComparison(name=name, self_score=self_score, peer_score=peer,
                              diff=round(self_score - peer, 1))


def test_strengths_and_improvements_follow_peer_scores():
    plan = build_development_plan([
        row("Ethics", 4.0, 4.5),
        row("Planning", 3.0, 2.0),
        row("Speaking", 3.0, 3.4),
        row("Teamwork", 4.0, 3.9),
        row("Sales", 4.0, 0.0),
    ])
    assert [c.name for c in plan.strengths] == ["Ethics", "Teamwork"]
    assert [c.name for c in plan.improvements] == ["Planning", "Speaking"]


def test_recommendation_order():
    plan = build_development_plan([
        row("Ethics", 3.0, 4.5),
        row("Planning", 4.0, 2.0),
        row("Speaking", 3.0, 3.4),
        row("Drawing", 0.0, 1.5),
    ], lang="en")
    assert plan.recommendations == (
        'You rate yourself higher than others do in "Planning". Building awareness in this area is recommended.',
        'You underestimate yourself in "Ethics". Others rate you higher.',
        'You need to improve in "Drawing". Training or mentoring can help.',
        'You need to improve in "Planning". Training or mentoring can help.',
        'You are strong in "Ethics". Share this skill with your teammates to show leadership.',
    )


def test_small_gap_gives_no_awareness_tip():
    plan = build_development_plan([row("Ethics", 4.0, 3.6)], lang="en")
    assert plan.recommendations == (
        'You are strong in "Ethics". Share this skill with your teammates to show leadership.',
    )


def test_self_only_category_counts_as_overrated():
    plan = build_development_plan([row("Planning", 4.0, 0.0)], lang="en")
    assert plan.improvements == ()
    assert plan.recommendations == (
        'You rate yourself higher than others do in "Planning". Building awareness in this area is recommended.',
    )


def test_labels_in_payload():
    plan = build_development_plan([row("Liderlik", 2.0, 2.0)], lang="en",
                                  label_for={"Liderlik": "Leadership"}.get)
    data = plan.as_dict({"Liderlik": "Leadership"}.get)
    assert data["improvements"][0]["label"] == "Leadership"
    assert data["improvements"][0]["name"] == "Liderlik"
    assert "Leadership" in data["recommendations"][0]


def test_empty_comparison():
    assert build_development_plan([]).as_dict() == {"strengths": [], "improvements": [], "recommendations": []}
