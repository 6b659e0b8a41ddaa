import pytest

from review_app.services.compensation_math import (
    build_action_plan, confidence_ratio, damped_score, recommend_compensation,
)
from review_app.services.confidence import estimate_confidence
from review_app.services.errors import ConfigurationError, ValidationError
from review_app.services.scoring_math import TargetScore


def target(tid, overall, count=5, *, department="Sales", manager_id="m1", categories=()):
    return TargetScore(
        target_id=tid,
        target_name=tid.upper(),
        department=department,
        manager_id=manager_id,
        overall_avg=overall,
        self_score=0.0,
        peer_avg=overall,
        evaluator_count=count,
        peer_completed_count=count,
        confidence=estimate_confidence(count, 5),
        category_averages=tuple(categories),
    )


class TestMath:
    def test_confidence_ratio_is_clamped(self):
        assert confidence_ratio(10, 5) == 1.0
        assert confidence_ratio(1, 5) == 0.2
        assert confidence_ratio(0, 5) == 0.0

    def test_low_confidence_pulls_toward_midpoint(self):
        assert damped_score(1.0, 1.0) == 1.0
        assert damped_score(1.0, 0.0) == pytest.approx(0.8)
        assert damped_score(0.5, 0.0) == 0.5


class TestRecommend:
    def test_scenario_max_and_min_of_pool(self):
        rows = recommend_compensation(
            [target("low", 2.0, count=1), target("high", 4.0, count=5)],
            pool="org", min_pct=20, max_pct=30, min_high_confidence=5,
        )
        by_id = {r.target_id: r for r in rows}
        assert by_id["high"].recommended_pct == 30.0
        assert by_id["low"].recommended_pct == 21.6
        assert [r.target_id for r in rows] == ["high", "low"]

    def test_degenerate_pool_gets_midpoint(self):
        rows = recommend_compensation(
            [target("a", 3.0, count=1), target("b", 3.0, count=5), target("c", 3.0, count=3)],
            pool="org", min_pct=20, max_pct=30,
        )
        assert {r.recommended_pct for r in rows} == {25.0}
        assert {r.perf_norm for r in rows} == {0.5}

    def test_targets_without_data_get_no_row(self):
        rows = recommend_compensation(
            [target("a", 0.0), target("b", 3.0)], pool="org", min_pct=0, max_pct=10,
        )
        assert [r.target_id for r in rows] == ["b"]

    def test_department_pools_normalize_separately(self):
        rows = recommend_compensation(
            [
                target("s1", 2.0, department="Sales"),
                target("s2", 4.0, department="Sales"),
                target("it", 2.0, department="IT"),
            ],
            pool="department", min_pct=0, max_pct=10,
        )
        by_id = {r.target_id: r for r in rows}
        assert by_id["s2"].recommended_pct == 10.0
        assert by_id["s1"].recommended_pct == 0.0
        # alone in its pool
        assert by_id["it"].recommended_pct == 5.0
        assert by_id["it"].pool_key == "IT"

    def test_manager_pool_skips_targets_without_manager(self):
        rows = recommend_compensation(
            [target("a", 3.0, manager_id="m1"), target("b", 4.0, manager_id="")],
            pool="manager", min_pct=0, max_pct=10,
        )
        assert [r.target_id for r in rows] == ["a"]

    def test_manager_pool_without_any_manager_fails(self):
        with pytest.raises(ConfigurationError) as exc:
            recommend_compensation(
                [target("a", 3.0, manager_id=""), target("b", 4.0, manager_id="")],
                pool="manager", min_pct=0, max_pct=10,
            )
        assert exc.value.as_dict()["kind"] == "configuration_error"
        assert exc.value.hint

    def test_manager_pool_with_no_eligible_targets_is_empty(self):
        assert recommend_compensation([target("a", 0.0, manager_id="")], pool="manager") == []

    def test_max_below_min_is_rejected(self):
        with pytest.raises(ValidationError):
            recommend_compensation([target("a", 3.0)], pool="org", min_pct=30, max_pct=20)

    def test_unknown_pool_is_rejected(self):
        with pytest.raises(ValidationError):
            recommend_compensation([target("a", 3.0)], pool="team", min_pct=0, max_pct=10)

    def test_rationale_text(self):
        row = recommend_compensation([target("a", 3.0, count=4)], pool="org", min_pct=0, max_pct=10, lang="en")[0]
        assert row.rationale == "Overall: 3.0 / 5 • Evaluators: 4 • Confidence: 80% • Pool: Organization"

    def test_rationale_rounds_confidence_half_up(self):
        row = recommend_compensation(
            [target("a", 3.0, count=2)], pool="org", min_pct=0, max_pct=10,
            min_high_confidence=3, lang="en",
        )[0]
        assert "Confidence: 67%" in row.rationale


class TestActionPlan:
    def test_two_weakest_categories(self):
        t = target("a", 3.0, categories=[("Ethics", 4.6), ("Planning", 2.0), ("Speaking", 3.1)])
        assert build_action_plan(t, "en") == (
            "Development in Planning: target 2.0 → 3.0 (3 months)",
            "Development in Speaking: target 3.1 → 4.1 (3 months)",
        )

    def test_goal_is_capped_at_five(self):
        t = target("a", 4.5, categories=[("Ethics", 4.6)])
        assert build_action_plan(t, "en") == ("Development in Ethics: target 4.6 → 5.0 (3 months)",)

    def test_insufficient_data_placeholder(self):
        plan = build_action_plan(target("a", 3.0), "en")
        assert plan == ("Development area: insufficient data (no category breakdown).",)
