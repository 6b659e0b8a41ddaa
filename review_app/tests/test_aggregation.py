import pytest

from review_app.services.aggregation import (
    GENERAL_CATEGORY, CategoryResolver, aggregate_evaluation, aggregate_evaluations,
)
from review_app.services.errors import ValidationError
from review_app.services.records import AssignmentRecord, ResponseRecord


def assignment(aid="a1", evaluator="e1", target="t1", level="peer"):
    return AssignmentRecord(assignment_id=aid, period_id="p1", evaluator_id=evaluator,
                            target_id=target, evaluator_level=level)


class TestCategoryResolver:
    def test_question_mapping_wins(self):
        resolver = CategoryResolver(by_question={"q1": "Leadership"}, by_category={"c1": "Ethics"})
        r = ResponseRecord("a1", question_id="q1", category_id="c1", category_name="Old name")
        assert resolver.resolve(r) == "Leadership"

    def test_category_then_stored_name(self):
        resolver = CategoryResolver(by_category={"c1": "Ethics"})
        assert resolver.resolve(ResponseRecord("a1", category_id="c1", category_name="Old")) == "Ethics"
        assert resolver.resolve(ResponseRecord("a1", category_id="c9", category_name="Old")) == "Old"

    def test_general_fallback(self):
        assert CategoryResolver().resolve(ResponseRecord("a1")) == GENERAL_CATEGORY


class TestAggregate:
    def test_zero_scores_are_ignored(self):
        responses = [
            ResponseRecord("a1", category_name="Ethics", std_score=4.0),
            ResponseRecord("a1", category_name="Ethics", std_score=0.0),
            ResponseRecord("a1", category_name="Planning", std_score=3.0),
        ]
        e = aggregate_evaluation(assignment(), responses)
        assert e.avg_score == 3.5
        assert e.response_count == 2
        assert e.category("Ethics").avg_score == 4.0
        assert e.category("Ethics").count == 1

    def test_adjusted_score_preferred_over_standard(self):
        r = ResponseRecord("a1", std_score=3.0, reel_score=4.5)
        assert r.score == 4.5
        assert ResponseRecord("a1", std_score=3.0).score == 3.0

    def test_no_scored_response_means_no_data(self):
        e = aggregate_evaluation(assignment(), [ResponseRecord("a1", std_score=0)])
        assert e.avg_score == 0.0
        assert not e.has_data

    def test_self_evaluation_level(self):
        e = aggregate_evaluation(assignment(evaluator="t1", level="manager"), [])
        assert e.is_self
        assert e.evaluator_level == "self"

    def test_one_result_per_assignment_in_order(self):
        responses = [
            ResponseRecord("a2", category_name="X", std_score=2.0),
            ResponseRecord("a1", category_name="X", std_score=5.0),
        ]
        out = aggregate_evaluations([assignment("a1"), assignment("a2", evaluator="e2"), assignment("a3")],
                                    responses)
        assert [e.assignment_id for e in out] == ["a1", "a2", "a3"]
        assert [e.avg_score for e in out] == [5.0, 2.0, 0.0]


class TestRecordsFromMapping:
    def test_missing_ids_raise(self):
        with pytest.raises(ValidationError):
            AssignmentRecord.from_mapping({"assignment_id": "a1", "evaluator_id": ""})
        with pytest.raises(ValidationError):
            ResponseRecord.from_mapping({"std_score": 3})

    def test_bad_score_raises(self):
        with pytest.raises(ValidationError):
            ResponseRecord.from_mapping({"assignment_id": "a1", "std_score": "high"})

    def test_blank_values_become_defaults(self):
        a = AssignmentRecord.from_mapping({
            "assignment_id": "a1", "evaluator_id": "e1", "target_id": "t1", "evaluator_level": " ",
        })
        assert a.evaluator_level == "peer"
        assert a.target_manager_id == ""
        r = ResponseRecord.from_mapping({"assignment_id": "a1", "std_score": "", "reel_score": "4"})
        assert r.std_score is None and r.score == 4.0
