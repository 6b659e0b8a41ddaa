"""
Coefficient resolution: evaluator weights by level, category weights by name
and the scoring knobs (confidence threshold, deviation settings).

Precedence, highest first:
    1. period snapshot tables (when the period was snapshotted)
    2. organization rows (latest row per key)
    3. system default rows (organization = NULL)
    4. ScoringDefaults.fallback_weight for any key still missing
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Optional

from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils import timezone

from review_app.models import (
    CategoryWeight, ConfidenceSettings, DeviationSettings, EvaluatorLevel,
    EvaluatorWeight, PeriodCategoryWeight, PeriodEvaluatorWeight,
    PeriodScoringSettings,
)
from review_app.services.errors import DataUnavailable

logger = logging.getLogger(__name__)

SELF_LEVEL = EvaluatorLevel.SELF.value
PEER_LEVEL = EvaluatorLevel.PEER.value
KNOWN_LEVELS = frozenset(EvaluatorLevel.values)


@dataclass(frozen=True)
class DeviationConfig:
    """Lenient/harsh rater settings. Reported with results, never applied."""
    lenient_diff_threshold: float = 0.75
    harsh_diff_threshold: float = 0.75
    lenient_multiplier: float = 0.85
    harsh_multiplier: float = 1.15

    @classmethod
    def from_row(cls, row) -> "DeviationConfig":
        return cls(
            lenient_diff_threshold=float(row.lenient_diff_threshold),
            harsh_diff_threshold=float(row.harsh_diff_threshold),
            lenient_multiplier=float(row.lenient_multiplier),
            harsh_multiplier=float(row.harsh_multiplier),
        )

    def as_dict(self):
        return {
            "lenient_diff_threshold": self.lenient_diff_threshold,
            "harsh_diff_threshold": self.harsh_diff_threshold,
            "lenient_multiplier": self.lenient_multiplier,
            "harsh_multiplier": self.harsh_multiplier,
        }


@dataclass(frozen=True)
class ScoringDefaults:
    """All fallback constants of the scoring core, in one place."""
    fallback_weight: float = 1.0
    self_weight: float = 1.0
    min_high_confidence_evaluator_count: int = 5
    deviation: DeviationConfig = field(default_factory=DeviationConfig)
    standard_weight: float = 0.15
    default_language: str = "en"

    @classmethod
    def from_settings(cls) -> "ScoringDefaults":
        conf = getattr(settings, "REVIEW_SCORING", None) or {}
        base = cls()
        deviation = DeviationConfig(
            lenient_diff_threshold=float(conf.get("lenient_diff_threshold", base.deviation.lenient_diff_threshold)),
            harsh_diff_threshold=float(conf.get("harsh_diff_threshold", base.deviation.harsh_diff_threshold)),
            lenient_multiplier=float(conf.get("lenient_multiplier", base.deviation.lenient_multiplier)),
            harsh_multiplier=float(conf.get("harsh_multiplier", base.deviation.harsh_multiplier)),
        )
        return cls(
            fallback_weight=float(conf.get("fallback_weight", base.fallback_weight)),
            self_weight=float(conf.get("self_weight", base.self_weight)),
            min_high_confidence_evaluator_count=int(
                conf.get("min_high_confidence_evaluator_count", base.min_high_confidence_evaluator_count)
            ),
            deviation=deviation,
            standard_weight=float(conf.get("standard_weight", base.standard_weight)),
            default_language=str(conf.get("default_language", base.default_language)),
        )


@dataclass(frozen=True)
class Coefficients:
    evaluator_weights: Dict[str, float]
    category_weights: Dict[str, float]
    min_high_confidence: int
    deviation: DeviationConfig
    standard_weight: float
    fallback_weight: float = 1.0
    snapshotted: bool = False

    def weight_for_evaluation(self, is_self: bool, level: Optional[str]) -> float:
        if is_self:
            key = SELF_LEVEL
        else:
            key = level if level in KNOWN_LEVELS and level != SELF_LEVEL else PEER_LEVEL
        return self.evaluator_weights.get(key, self.fallback_weight)

    def weight_for_category(self, name: str) -> float:
        return self.category_weights.get(name, self.fallback_weight)

    def as_dict(self):
        return {
            "evaluator_weights": dict(self.evaluator_weights),
            "category_weights": dict(self.category_weights),
            "min_high_confidence": self.min_high_confidence,
            "deviation": self.deviation.as_dict(),
            "standard_weight": self.standard_weight,
            "snapshotted": self.snapshotted,
        }


# ── helpers ───────────────────────────────────────────────────────────────
def _latest_by(rows, key):
    """rows must be ordered newest first; keeps the first row per key."""
    out = {}
    for row in rows:
        k = getattr(row, key)
        if k and k not in out:
            out[k] = row
    return out


def _merge_org_over_default(org_rows, default_rows, key) -> Dict[str, float]:
    org_map = _latest_by(org_rows, key)
    default_map = _latest_by(default_rows, key)
    merged = {}
    for k in [*default_map, *[k for k in org_map if k not in default_map]]:
        row = org_map.get(k) or default_map[k]
        merged[k] = float(row.weight)
    return merged


def _min_high(value, defaults: ScoringDefaults) -> int:
    # 0 / NULL means "not configured"
    return int(value or 0) or defaults.min_high_confidence_evaluator_count


def _live_coefficients(org_id, defaults: ScoringDefaults) -> Coefficients:
    if org_id:
        org_eval = EvaluatorWeight.objects.filter(organization_id=org_id).order_by("-created_at")
        org_cat = CategoryWeight.objects.filter(organization_id=org_id).order_by("-created_at")
    else:
        org_eval = EvaluatorWeight.objects.none()
        org_cat = CategoryWeight.objects.none()
    def_eval = EvaluatorWeight.objects.filter(organization__isnull=True).order_by("-created_at")
    def_cat = CategoryWeight.objects.filter(organization__isnull=True).order_by("-created_at")

    evaluator_weights = _merge_org_over_default(org_eval, def_eval, "position_level")
    evaluator_weights.setdefault(SELF_LEVEL, defaults.self_weight)
    category_weights = _merge_org_over_default(org_cat, def_cat, "category_name")

    min_high = defaults.min_high_confidence_evaluator_count
    deviation = defaults.deviation
    if org_id:
        conf = ConfidenceSettings.objects.filter(organization_id=org_id).first()
        if conf is not None:
            min_high = _min_high(conf.min_high_confidence_evaluator_count, defaults)
        dev = DeviationSettings.objects.filter(organization_id=org_id).first()
        if dev is not None:
            deviation = DeviationConfig.from_row(dev)

    return Coefficients(
        evaluator_weights=evaluator_weights,
        category_weights=category_weights,
        min_high_confidence=min_high,
        deviation=deviation,
        standard_weight=defaults.standard_weight,
        fallback_weight=defaults.fallback_weight,
        snapshotted=False,
    )


def _snapshot_coefficients(scoring: PeriodScoringSettings, defaults: ScoringDefaults) -> Coefficients:
    evaluator_weights = {
        row.position_level: float(row.weight)
        for row in PeriodEvaluatorWeight.objects.filter(period_id=scoring.period_id)
    }
    evaluator_weights.setdefault(SELF_LEVEL, defaults.self_weight)
    category_weights = {
        row.category_name: float(row.weight)
        for row in PeriodCategoryWeight.objects.filter(period_id=scoring.period_id)
    }
    return Coefficients(
        evaluator_weights=evaluator_weights,
        category_weights=category_weights,
        min_high_confidence=_min_high(scoring.min_high_confidence_evaluator_count, defaults),
        deviation=DeviationConfig.from_row(scoring),
        standard_weight=float(scoring.standard_weight or 0) or defaults.standard_weight,
        fallback_weight=defaults.fallback_weight,
        snapshotted=True,
    )


# ── public API ────────────────────────────────────────────────────────────
def resolve_coefficients(org_id, period_id=None, *, defaults: Optional[ScoringDefaults] = None) -> Coefficients:
    """
    Effective coefficients for an organization and (optionally) a period.

    A snapshotted period only ever reads its frozen tables, so later edits of
    organization or default weights cannot change its reports.

    Raises:
        DataUnavailable: the weight tables could not be read.
    """
    defaults = defaults or ScoringDefaults.from_settings()
    try:
        if period_id:
            scoring = PeriodScoringSettings.objects.filter(period_id=period_id).first()
            if scoring is not None:
                return _snapshot_coefficients(scoring, defaults)
        return _live_coefficients(org_id, defaults)
    except DatabaseError as exc:
        logger.error("Coefficient lookup failed for org=%s period=%s: %s", org_id, period_id, exc)
        raise DataUnavailable(
            "Coefficient tables could not be read.",
            hint="Check the database connection and that all migrations are applied.",
        ) from exc


def snapshot_period_coefficients(period, *, overwrite: bool = True,
                                 defaults: Optional[ScoringDefaults] = None) -> dict:
    """
    Freeze the currently effective coefficients into the period tables.

    With overwrite=False an existing snapshot is kept as is.
    """
    defaults = defaults or ScoringDefaults.from_settings()
    try:
        with transaction.atomic():
            existing = (PeriodScoringSettings.objects
                        .select_for_update()
                        .filter(period=period)
                        .first())
            if existing is not None and not overwrite:
                logger.info("Period %s already snapshotted; overwrite disabled", period.pk)
                return {"snapshotted": False, "evaluator_weights": 0, "category_weights": 0}

            live = _live_coefficients(period.organization_id, defaults)

            PeriodEvaluatorWeight.objects.filter(period=period).delete()
            PeriodCategoryWeight.objects.filter(period=period).delete()
            PeriodEvaluatorWeight.objects.bulk_create([
                PeriodEvaluatorWeight(period=period, position_level=level, weight=Decimal(str(w)))
                for level, w in live.evaluator_weights.items()
            ])
            PeriodCategoryWeight.objects.bulk_create([
                PeriodCategoryWeight(period=period, category_name=name, weight=Decimal(str(w)))
                for name, w in live.category_weights.items()
            ])
            PeriodScoringSettings.objects.update_or_create(
                period=period,
                defaults={
                    "min_high_confidence_evaluator_count": live.min_high_confidence,
                    "lenient_diff_threshold": Decimal(str(live.deviation.lenient_diff_threshold)),
                    "harsh_diff_threshold": Decimal(str(live.deviation.harsh_diff_threshold)),
                    "lenient_multiplier": Decimal(str(live.deviation.lenient_multiplier)),
                    "harsh_multiplier": Decimal(str(live.deviation.harsh_multiplier)),
                    "standard_weight": Decimal(str(live.standard_weight)),
                    "snapshotted_at": timezone.now(),
                },
            )
    except DatabaseError as exc:
        logger.error("Snapshot failed for period %s: %s", period.pk, exc)
        raise DataUnavailable(
            "Period coefficients could not be snapshotted.",
            hint="Check that the period snapshot tables are migrated.",
        ) from exc

    logger.info(
        "Snapshotted period %s: %d evaluator weights, %d category weights",
        period.pk, len(live.evaluator_weights), len(live.category_weights),
    )
    return {
        "snapshotted": True,
        "evaluator_weights": len(live.evaluator_weights),
        "category_weights": len(live.category_weights),
    }
