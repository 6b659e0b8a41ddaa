"""
Compensation recommendation over scored targets.

Per pool:
    perf_norm = (score - min) / (max - min), 0.5 when max == min
    conf      = clamp(evaluator_count / min_high, 0, 1)
    score     = clamp(0.5 + (perf_norm - 0.5) * (0.6 + 0.4 * conf), 0, 1)
    pct       = round(min_pct + (max_pct - min_pct) * score, 1)

Low confidence pulls the score toward the pool midpoint.
"""
from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from review_app.services.confidence import DEFAULT_MIN_HIGH
from review_app.services.errors import ConfigurationError, ValidationError
from review_app.services.messages import DEFAULT_LANGUAGE, message
from review_app.services.numbers import clamp, round0, round1
from review_app.services.scoring_math import TargetScore

logger = logging.getLogger(__name__)

POOL_ORG = "org"
POOL_DEPARTMENT = "department"
POOL_MANAGER = "manager"
POOLS = (POOL_ORG, POOL_DEPARTMENT, POOL_MANAGER)

ACTION_PLAN_CATEGORIES = 2
MAX_SCORE = 5.0


@dataclass(frozen=True)
class CompensationRow:
    target_id: str
    name: str
    department: str
    manager_id: str
    pool: str
    pool_key: str
    overall_avg: float
    evaluator_count: int
    confidence: float
    perf_norm: float
    score: float
    recommended_pct: float
    rationale: str
    action_plan: Tuple[str, ...] = field(default_factory=tuple)

    def as_dict(self):
        return {
            "target_id": self.target_id,
            "name": self.name,
            "department": self.department,
            "manager_id": self.manager_id or None,
            "pool": self.pool,
            "pool_key": self.pool_key,
            "overall_avg": self.overall_avg,
            "evaluator_count": self.evaluator_count,
            "confidence": self.confidence,
            "perf_norm": self.perf_norm,
            "score": self.score,
            "recommended_pct": self.recommended_pct,
            "rationale": self.rationale,
            "action_plan": list(self.action_plan),
        }


# ── math ──────────────────────────────────────────────────────────────────
def normalize_performance(score: float, pool_min: float, pool_max: float) -> float:
    if pool_max == pool_min:
        return 0.5
    return (score - pool_min) / (pool_max - pool_min)


def confidence_ratio(evaluator_count: int, min_high: int) -> float:
    min_high = int(min_high or 0) or DEFAULT_MIN_HIGH
    return clamp(evaluator_count / min_high, 0.0, 1.0)


def damped_score(perf_norm: float, conf: float) -> float:
    return clamp(0.5 + (perf_norm - 0.5) * (0.6 + 0.4 * conf), 0.0, 1.0)


def recommended_pct(min_pct: float, max_pct: float, score: float) -> float:
    return round1(min_pct + (max_pct - min_pct) * score)


# ── text ──────────────────────────────────────────────────────────────────
def _rationale(target: TargetScore, conf: float, pool: str, lang: str) -> str:
    return message(
        "comp.rationale", lang,
        overall=f"{target.overall_avg:.1f}",
        count=target.evaluator_count,
        confidence=round0(conf * 100),
        pool=message(f"comp.pool.{pool}", lang),
    )


def build_action_plan(target: TargetScore, lang: str = DEFAULT_LANGUAGE,
                      label_for: Optional[Callable[[str], str]] = None) -> Tuple[str, ...]:
    """Two lowest-average categories, each with a one step improvement goal."""
    label_for = label_for or (lambda name: name)
    weakest = sorted(target.category_averages, key=lambda pair: pair[1])[:ACTION_PLAN_CATEGORIES]
    if not weakest:
        return (message("comp.insufficient", lang),)
    return tuple(
        message(
            "comp.action", lang,
            name=label_for(name),
            current=f"{avg:.1f}",
            goal=f"{min(MAX_SCORE, avg + 1):.1f}",
        )
        for name, avg in weakest
    )


# ── pooling ───────────────────────────────────────────────────────────────
def _pool_key(target: TargetScore, pool: str) -> str:
    if pool == POOL_DEPARTMENT:
        return target.department or "-"
    if pool == POOL_MANAGER:
        return target.manager_id or ""
    return POOL_ORG


def partition_pools(targets: Iterable[TargetScore], pool: str) -> "OrderedDict[str, List[TargetScore]]":
    pools: Dict[str, List[TargetScore]] = OrderedDict()
    for target in targets:
        key = _pool_key(target, pool)
        if not key:
            logger.debug("Target %s has no manager; left out of manager pools", target.target_id)
            continue
        pools.setdefault(key, []).append(target)
    return pools


# ── public API ────────────────────────────────────────────────────────────
def validate_bounds(min_pct: float, max_pct: float) -> None:
    if max_pct < min_pct:
        raise ValidationError(
            f"max ({max_pct}) must not be lower than min ({min_pct}).",
            hint="Swap the values or raise max.",
        )


def recommend_compensation(targets: Iterable[TargetScore],
                           pool: str = POOL_ORG,
                           min_pct: float = 0.0,
                           max_pct: float = 0.0,
                           min_high_confidence: int = DEFAULT_MIN_HIGH,
                           lang: str = DEFAULT_LANGUAGE,
                           label_for: Optional[Callable[[str], str]] = None) -> List[CompensationRow]:
    """
    Raise recommendation per scored target, sorted by recommended_pct desc.

    Targets without data (overall_avg = 0) get no row at all.

    Raises:
        ValidationError: unknown pool or max_pct < min_pct.
        ConfigurationError: manager pooling while no eligible target has a manager.
    """
    if pool not in POOLS:
        raise ValidationError(
            f"Unknown pool {pool!r}.",
            hint=f"Use one of: {', '.join(POOLS)}.",
        )
    min_pct, max_pct = float(min_pct), float(max_pct)
    validate_bounds(min_pct, max_pct)

    eligible = [t for t in targets if t.has_data]
    pools = partition_pools(eligible, pool)
    if pool == POOL_MANAGER and eligible and not pools:
        raise ConfigurationError(
            "Managers are not configured for this organization.",
            hint="Assign a manager to each user, or use the org or department pool.",
        )

    rows: List[CompensationRow] = []
    for key, members in pools.items():
        scores = [m.overall_avg for m in members]
        pool_min, pool_max = min(scores), max(scores)
        for member in members:
            perf = normalize_performance(member.overall_avg, pool_min, pool_max)
            conf = confidence_ratio(member.evaluator_count, min_high_confidence)
            score = damped_score(perf, conf)
            rows.append(CompensationRow(
                target_id=member.target_id,
                name=member.target_name,
                department=member.department,
                manager_id=member.manager_id,
                pool=pool,
                pool_key=key,
                overall_avg=member.overall_avg,
                evaluator_count=member.evaluator_count,
                confidence=round(conf, 4),
                perf_norm=round(perf, 4),
                score=round(score, 4),
                recommended_pct=recommended_pct(min_pct, max_pct, score),
                rationale=_rationale(member, conf, pool, lang),
                action_plan=build_action_plan(member, lang, label_for),
            ))

    rows.sort(key=lambda r: r.recommended_pct, reverse=True)
    logger.info("Compensation: %d rows over %d %s pools", len(rows), len(pools), pool)
    return rows
