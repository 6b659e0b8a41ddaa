"""
Response aggregation: raw per-question rows -> one PerEvaluation per assignment.

Only rows with a positive score count. A zero score means "no information"
and is left out of every mean; an evaluation without any positive row gets
avg_score = 0, which downstream code treats as "no data".
"""
from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from review_app.services.numbers import mean, round1
from review_app.services.records import AssignmentRecord, ResponseRecord

logger = logging.getLogger(__name__)

GENERAL_CATEGORY = "General"
SELF_LEVEL = "self"


class CategoryResolver:
    """
    Maps a response to its canonical category key.

    Lookup order: question_id, then category_id, then the category name
    stored on the response. Stored names stay the fallback because display
    names may have been renamed after the answers were recorded.
    """

    def __init__(self, by_question: Optional[Dict[str, str]] = None,
                 by_category: Optional[Dict[str, str]] = None):
        self.by_question = dict(by_question or {})
        self.by_category = dict(by_category or {})

    def resolve(self, response: ResponseRecord) -> str:
        if response.question_id and response.question_id in self.by_question:
            return self.by_question[response.question_id]
        if response.category_id and response.category_id in self.by_category:
            return self.by_category[response.category_id]
        if response.category_name:
            return response.category_name
        return GENERAL_CATEGORY


@dataclass(frozen=True)
class CategoryScore:
    name: str
    avg_score: float
    count: int

    def as_dict(self):
        return {"name": self.name, "score": self.avg_score}


@dataclass(frozen=True)
class PerEvaluation:
    assignment_id: str
    evaluator_id: str
    is_self: bool
    evaluator_level: str
    avg_score: float
    categories: Tuple[CategoryScore, ...] = field(default_factory=tuple)
    response_count: int = 0
    evaluator_name: str = "-"
    completed_at: Optional[datetime] = None

    @property
    def has_data(self) -> bool:
        return self.response_count > 0 and self.avg_score > 0

    def category(self, name: str) -> Optional[CategoryScore]:
        for c in self.categories:
            if c.name == name:
                return c
        return None


def aggregate_evaluation(assignment: AssignmentRecord,
                         responses: Iterable[ResponseRecord],
                         resolver: Optional[CategoryResolver] = None) -> PerEvaluation:
    resolver = resolver or CategoryResolver()
    scores: List[float] = []
    by_category: Dict[str, List[float]] = {}

    for response in responses:
        if not response.has_score:
            continue
        score = response.score
        scores.append(score)
        by_category.setdefault(resolver.resolve(response), []).append(score)

    avg = mean(scores)
    categories = tuple(
        CategoryScore(name=name, avg_score=round1(mean(values)), count=len(values))
        for name, values in by_category.items()
    )
    return PerEvaluation(
        assignment_id=assignment.assignment_id,
        evaluator_id=assignment.evaluator_id,
        is_self=assignment.is_self,
        evaluator_level=SELF_LEVEL if assignment.is_self else (assignment.evaluator_level or "peer"),
        avg_score=round1(avg) if avg is not None else 0.0,
        categories=categories,
        response_count=len(scores),
        evaluator_name=assignment.evaluator_name,
        completed_at=assignment.completed_at,
    )


def group_by_assignment(responses: Iterable[ResponseRecord]) -> Dict[str, List[ResponseRecord]]:
    grouped: Dict[str, List[ResponseRecord]] = defaultdict(list)
    for response in responses:
        grouped[response.assignment_id].append(response)
    return grouped


def aggregate_evaluations(assignments: Iterable[AssignmentRecord],
                          responses: Iterable[ResponseRecord],
                          resolver: Optional[CategoryResolver] = None) -> List[PerEvaluation]:
    """One PerEvaluation per assignment, in assignment order."""
    grouped = group_by_assignment(responses)
    evaluations = [
        aggregate_evaluation(a, grouped.get(a.assignment_id, ()), resolver)
        for a in assignments
    ]
    empty = sum(1 for e in evaluations if not e.has_data)
    if empty:
        logger.debug("%d of %d evaluations have no scored responses", empty, len(evaluations))
    return evaluations
