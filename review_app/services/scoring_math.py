"""
Weighted scoring of one target from its aggregated evaluations.

    self_score   = avg of the self evaluation (0 when missing)
    peer_avg     = simple mean of the non-self evaluations
    overall_avg  = Σ(w·avg) / Σw, w = evaluator weight by level
    category     = self/peer simple means per category, diff = self - peer

Evaluations without data (avg_score = 0) do not contribute to any mean.
Everything here is pure.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from review_app.services.aggregation import PerEvaluation
from review_app.services.coefficients import Coefficients
from review_app.services.confidence import Confidence, estimate_confidence
from review_app.services.messages import DEFAULT_LANGUAGE
from review_app.services.numbers import mean, round1, weighted_mean
from review_app.services.swot import SwotSummary, derive_swot_pair


@dataclass(frozen=True)
class CategoryComparison:
    name: str
    self_score: float
    peer_score: float
    diff: float
    weight: float = 1.0

    def as_dict(self):
        return {
            "name": self.name,
            "self": self.self_score,
            "peer": self.peer_score,
            "diff": self.diff,
            "weight": self.weight,
        }


@dataclass(frozen=True)
class TargetScore:
    target_id: str
    target_name: str
    department: str
    manager_id: str
    overall_avg: float
    self_score: float
    peer_avg: float
    evaluator_count: int
    peer_completed_count: int
    confidence: Confidence
    evaluations: Tuple[PerEvaluation, ...] = field(default_factory=tuple)
    category_compare: Tuple[CategoryComparison, ...] = field(default_factory=tuple)
    category_averages: Tuple[Tuple[str, float], ...] = field(default_factory=tuple)
    swot: Dict[str, SwotSummary] = field(default_factory=dict)

    @property
    def has_data(self) -> bool:
        return self.overall_avg > 0

    def as_dict(self, include_evaluations: bool = True):
        data = {
            "target_id": self.target_id,
            "name": self.target_name,
            "department": self.department,
            "manager_id": self.manager_id or None,
            "overall_avg": self.overall_avg,
            "self_score": self.self_score,
            "peer_avg": self.peer_avg,
            "evaluator_count": self.evaluator_count,
            "peer_completed_count": self.peer_completed_count,
            "confidence": self.confidence.as_dict(),
            "category_compare": [c.as_dict() for c in self.category_compare],
            "category_averages": [{"name": n, "score": s} for n, s in self.category_averages],
            "swot": {side: s.as_dict() for side, s in self.swot.items()},
        }
        if include_evaluations:
            data["evaluations"] = [
                {
                    "evaluator_id": e.evaluator_id,
                    "evaluator_name": e.evaluator_name,
                    "evaluator_level": e.evaluator_level,
                    "is_self": e.is_self,
                    "avg_score": e.avg_score,
                    "categories": [c.as_dict() for c in e.categories],
                    "completed_at": e.completed_at.isoformat() if e.completed_at else None,
                }
                for e in self.evaluations
            ]
        return data


# ── building blocks ───────────────────────────────────────────────────────
def self_score_of(evaluations: Iterable[PerEvaluation]) -> float:
    for e in evaluations:
        if e.is_self and e.has_data:
            return e.avg_score
    return 0.0


def peer_average(evaluations: Iterable[PerEvaluation]) -> float:
    value = mean(e.avg_score for e in evaluations if not e.is_self and e.has_data)
    return round1(value) if value is not None else 0.0


def overall_average(evaluations: Iterable[PerEvaluation], coefficients: Coefficients) -> float:
    pairs = [
        (coefficients.weight_for_evaluation(e.is_self, e.evaluator_level), e.avg_score)
        for e in evaluations
        if e.has_data
    ]
    return round1(weighted_mean(pairs))


def _category_order(evaluations: List[PerEvaluation]) -> List[str]:
    names: List[str] = []
    for e in evaluations:
        for c in e.categories:
            if c.name not in names:
                names.append(c.name)
    return names


def compare_categories(evaluations: Iterable[PerEvaluation],
                       coefficients: Coefficients) -> Tuple[CategoryComparison, ...]:
    """
    Self vs. peer per category, in first-seen order.

    A side without data counts as 0 in the diff.
    """
    evaluations = list(evaluations)
    rows = []
    for name in _category_order(evaluations):
        self_vals, peer_vals = [], []
        for e in evaluations:
            c = e.category(name)
            if c is None or c.avg_score <= 0:
                continue
            (self_vals if e.is_self else peer_vals).append(c.avg_score)
        if not self_vals and not peer_vals:
            continue
        self_avg = round1(mean(self_vals)) if self_vals else 0.0
        peer_avg = round1(mean(peer_vals)) if peer_vals else 0.0
        diff = round1(self_avg - peer_avg)
        rows.append(CategoryComparison(
            name=name,
            self_score=self_avg,
            peer_score=peer_avg,
            diff=diff,
            weight=coefficients.weight_for_category(name),
        ))
    return tuple(rows)


def category_averages(evaluations: Iterable[PerEvaluation]) -> Tuple[Tuple[str, float], ...]:
    """Mean of every evaluator (self included) per category."""
    evaluations = list(evaluations)
    out = []
    for name in _category_order(evaluations):
        values = [
            c.avg_score for c in (e.category(name) for e in evaluations)
            if c is not None and c.avg_score > 0
        ]
        if values:
            out.append((name, round1(mean(values))))
    return tuple(out)


def count_evaluators(evaluations: Iterable[PerEvaluation]) -> int:
    return len({e.evaluator_id for e in evaluations})


def count_completed_peers(evaluations: Iterable[PerEvaluation]) -> int:
    return len({e.evaluator_id for e in evaluations if not e.is_self})


# ── public API ────────────────────────────────────────────────────────────
def score_target(evaluations: Iterable[PerEvaluation],
                 coefficients: Coefficients,
                 *,
                 target_id: str = "",
                 target_name: str = "-",
                 department: str = "-",
                 manager_id: str = "",
                 lang: str = DEFAULT_LANGUAGE,
                 label_for: Optional[Callable[[str], str]] = None) -> TargetScore:
    """
    Score one target from the completed evaluations it received.

    Pure: same evaluations and coefficients always give the same TargetScore.
    """
    evaluations = tuple(evaluations)
    compare = compare_categories(evaluations, coefficients)
    peers = count_completed_peers(evaluations)
    return TargetScore(
        target_id=target_id,
        target_name=target_name,
        department=department,
        manager_id=manager_id,
        overall_avg=overall_average(evaluations, coefficients),
        self_score=self_score_of(evaluations),
        peer_avg=peer_average(evaluations),
        evaluator_count=count_evaluators(evaluations),
        peer_completed_count=peers,
        confidence=estimate_confidence(peers, coefficients.min_high_confidence),
        evaluations=evaluations,
        category_compare=compare,
        category_averages=category_averages(evaluations),
        swot=derive_swot_pair(compare, lang, label_for),
    )
