"""
ORM -> scoring core -> JSON-ready payloads.

Every report (admin results, personal results, development plan,
compensation, action plans) goes through ``score_period_targets`` so the
math is computed exactly one way. Category labels are only applied to the
finished payloads.
"""
import logging
import uuid
from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import replace
from typing import Dict, List, Optional

from django.db import DatabaseError

from review_app.models import (
    Assignment, AssignmentStatus, EvaluationPeriod, EvaluationResponse,
    Question, QuestionCategory,
)
from review_app.services.aggregation import CategoryResolver, aggregate_evaluations
from review_app.services.coefficients import Coefficients, resolve_coefficients
from review_app.services.compensation_math import recommend_compensation
from review_app.services.confidence import estimate_confidence
from review_app.services.development import build_development_plan
from review_app.services.errors import DataUnavailable, NotFoundError, ValidationError
from review_app.services.messages import message, normalize_language
from review_app.services.records import AssignmentRecord, ResponseRecord
from review_app.services.scoring_math import TargetScore, compare_categories, score_target

logger = logging.getLogger(__name__)


@contextmanager
def _db_guard(what):
    try:
        yield
    except DatabaseError as exc:
        logger.error("Could not read %s: %s", what, exc)
        raise DataUnavailable(
            f"Could not read {what}.",
            hint="Check the database connection and run `manage.py migrate`.",
        ) from exc


def parse_uuid(value, field_name):
    if value in (None, ""):
        raise ValidationError(f"{field_name} is required.", hint=f"Send a {field_name}.")
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is not a valid id: {value!r}")


# ── category labels ───────────────────────────────────────────────────────
class CategoryLabels:
    """
    Canonical category name -> display label for one language.

    tr is the canonical language; en/fr fall back to the canonical name when
    no translation is stored.
    """

    def __init__(self, translations: Optional[Dict[str, Dict[str, str]]] = None, lang="en"):
        self.translations = translations or {}
        self.lang = normalize_language(lang)

    @classmethod
    def load(cls, lang="en", names=None):
        qs = QuestionCategory.objects.all()
        if names is not None:
            qs = qs.filter(name__in=list(names))
        translations = {}
        with _db_guard("question categories"):
            for name, name_en, name_fr in qs.values_list("name", "name_en", "name_fr"):
                translations.setdefault(name, {"en": name_en or "", "fr": name_fr or ""})
        return cls(translations, lang)

    def __call__(self, name: str) -> str:
        if self.lang == "tr":
            return name
        return self.translations.get(name, {}).get(self.lang) or name

    def _rows(self, rows):
        for row in rows or ():
            if isinstance(row, dict) and "name" in row:
                row["label"] = self(row["name"])

    def apply(self, data: dict) -> dict:
        """Add a ``label`` next to every category ``name`` in a target payload."""
        self._rows(data.get("category_compare"))
        self._rows(data.get("category_averages"))
        for side in (data.get("swot") or {}).values():
            for bucket in ("strengths", "weaknesses", "opportunities"):
                self._rows(side.get(bucket))
        for evaluation in data.get("evaluations") or ():
            self._rows(evaluation.get("categories"))
        return data


def period_label(period: EvaluationPeriod, lang="en") -> str:
    lang = normalize_language(lang)
    if lang == "en" and period.name_en:
        return period.name_en
    if lang == "fr" and period.name_fr:
        return period.name_fr
    return period.name


# ── ingestion ─────────────────────────────────────────────────────────────
def load_period(period_id, org_id=None) -> EvaluationPeriod:
    pid = parse_uuid(period_id, "period_id")
    with _db_guard("evaluation periods"):
        period = EvaluationPeriod.objects.filter(pk=pid).first()
    if period is None or (org_id and str(period.organization_id) != str(org_id)):
        raise NotFoundError(
            f"Period {period_id} was not found for this organization.",
            hint="Pick a period of the selected organization.",
        )
    return period


def build_resolver(responses: List[ResponseRecord]) -> CategoryResolver:
    question_ids = {r.question_id for r in responses if r.question_id}
    category_ids = {r.category_id for r in responses if r.category_id}
    by_question, by_category = {}, {}
    with _db_guard("question catalog"):
        if question_ids:
            rows = (Question.objects
                    .filter(pk__in=question_ids, category__isnull=False)
                    .values_list("question_id", "category__name"))
            by_question = {str(qid): name for qid, name in rows}
        if category_ids:
            rows = QuestionCategory.objects.filter(pk__in=category_ids).values_list("category_id", "name")
            by_category = {str(cid): name for cid, name in rows}
    return CategoryResolver(by_question, by_category)


def load_records(assignments_qs):
    """Completed assignments and their responses as typed records."""
    with _db_guard("assignments"):
        assignments = [
            AssignmentRecord.from_model(a)
            for a in assignments_qs.select_related("evaluator", "target").order_by("completed_at", "created_at")
        ]
    ids = [a.assignment_id for a in assignments]
    responses = []
    if ids:
        with _db_guard("responses"):
            responses = [
                ResponseRecord.from_model(r)
                for r in EvaluationResponse.objects.filter(assignment_id__in=ids)
            ]
    return assignments, responses


def score_assignments(assignments: List[AssignmentRecord],
                      responses: List[ResponseRecord],
                      coefficients: Coefficients,
                      lang="en",
                      label_for=None) -> List[TargetScore]:
    """One TargetScore per target, in first-seen order."""
    evaluations = aggregate_evaluations(assignments, responses, build_resolver(responses))
    by_target: "OrderedDict[str, list]" = OrderedDict()
    first_row: Dict[str, AssignmentRecord] = {}
    for record, evaluation in zip(assignments, evaluations):
        by_target.setdefault(record.target_id, []).append(evaluation)
        first_row.setdefault(record.target_id, record)

    scores = []
    for target_id, target_evals in by_target.items():
        info = first_row[target_id]
        scores.append(score_target(
            target_evals, coefficients,
            target_id=target_id,
            target_name=info.target_name,
            department=info.target_department,
            manager_id=info.target_manager_id,
            lang=lang,
            label_for=label_for,
        ))
    return scores


def score_period_targets(org_id, period_id, person_id=None, lang="en", label_for=None):
    """
    Score every target of an organization in a period.

    Returns (period, coefficients, [TargetScore]).
    """
    oid = parse_uuid(org_id, "org_id")
    period = load_period(period_id, oid)
    qs = Assignment.objects.filter(
        period=period,
        status=AssignmentStatus.COMPLETED,
        target__organization_id=oid,
    )
    if person_id:
        qs = qs.filter(target_id=parse_uuid(person_id, "person_id"))

    coefficients = resolve_coefficients(oid, period.pk)
    assignments, responses = load_records(qs)
    targets = score_assignments(assignments, responses, coefficients, lang, label_for)
    logger.info("Scored %d targets for period %s (snapshot=%s)", len(targets), period.pk, coefficients.snapshotted)
    return period, coefficients, targets


# ── admin results ─────────────────────────────────────────────────────────
def compute_period_results(org_id, period_id, person_id=None, lang="en") -> dict:
    lang = normalize_language(lang)
    labels = CategoryLabels.load(lang)
    period, coefficients, targets = score_period_targets(org_id, period_id, person_id, lang, labels)
    return {
        "period_id": str(period.pk),
        "period_name": period_label(period, lang),
        "coefficients": coefficients.as_dict(),
        "results": [labels.apply(t.as_dict()) for t in targets],
    }


# ── compensation ──────────────────────────────────────────────────────────
def compute_compensation(org_id, period_id, pool="org", min_pct=0.0, max_pct=0.0, lang="en") -> dict:
    lang = normalize_language(lang)
    labels = CategoryLabels.load(lang)
    period, coefficients, targets = score_period_targets(org_id, period_id, lang=lang, label_for=labels)
    rows = recommend_compensation(
        targets, pool, min_pct, max_pct,
        min_high_confidence=coefficients.min_high_confidence,
        lang=lang,
        label_for=labels,
    )
    return {
        "period_id": str(period.pk),
        "period_name": period_label(period, lang),
        "pool": pool,
        "min_pct": float(min_pct),
        "max_pct": float(max_pct),
        "min_high_confidence": coefficients.min_high_confidence,
        "rows": [r.as_dict() for r in rows],
    }


# ── personal results ──────────────────────────────────────────────────────
def peer_progress(user) -> Dict[str, Dict[str, int]]:
    """Expected and completed peer assignments per period for one target."""
    progress: Dict[str, Dict[str, int]] = {}
    with _db_guard("assignments"):
        rows = (Assignment.objects
                .filter(target=user)
                .exclude(evaluator=user)
                .values_list("period_id", "status"))
        for period_id, status in rows:
            cur = progress.setdefault(str(period_id), {"expected": 0, "completed": 0})
            cur["expected"] += 1
            if status == AssignmentStatus.COMPLETED:
                cur["completed"] += 1
    return progress


def _summary_rows(target: TargetScore, progress: Dict[str, int], lang: str) -> list:
    """
    Self row plus one aggregated team row. Per-rater rows are never exposed,
    and the team row only appears once every expected peer has answered.
    """
    self_evals = [e for e in target.evaluations if e.is_self]
    peer_evals = [e for e in target.evaluations if not e.is_self]
    rows = []
    if self_evals or target.self_score:
        completed = self_evals[0].completed_at if self_evals else None
        rows.append({
            "evaluator_name": message("summary.self", lang),
            "is_self": True,
            "evaluator_level": "self",
            "avg_score": target.self_score,
            "categories": [{"name": c.name, "score": c.self_score}
                           for c in target.category_compare if c.self_score > 0],
            "completed_at": completed.isoformat() if completed else None,
        })
    team_complete = progress["expected"] > 0 and progress["completed"] >= progress["expected"]
    if team_complete and peer_evals:
        stamps = [e.completed_at for e in peer_evals if e.completed_at]
        latest = max(stamps) if stamps else None
        rows.append({
            "evaluator_name": message("summary.team", lang),
            "is_self": False,
            "evaluator_level": "peer",
            "avg_score": target.peer_avg,
            "categories": [{"name": c.name, "score": c.peer_score}
                           for c in target.category_compare if c.peer_score > 0],
            "completed_at": latest.isoformat() if latest else None,
        })
    return rows


def _latest_completion(target: TargetScore):
    stamps = [e.completed_at for e in target.evaluations if e.completed_at]
    return max(stamps) if stamps else None


def compute_user_results(user, lang=None) -> List[dict]:
    """Results of every period in which ``user`` received completed evaluations, newest first."""
    lang = normalize_language(lang or getattr(user, "preferred_language", None))
    labels = CategoryLabels.load(lang)
    progress = peer_progress(user)

    assignments, responses = load_records(
        Assignment.objects.filter(target=user, status=AssignmentStatus.COMPLETED)
    )
    by_period: "OrderedDict[str, list]" = OrderedDict()
    for record in assignments:
        by_period.setdefault(record.period_id, []).append(record)
    if not by_period:
        return []

    with _db_guard("evaluation periods"):
        periods = {str(p.pk): p for p in EvaluationPeriod.objects.filter(pk__in=list(by_period))}

    results = []
    for period_id, period_assignments in by_period.items():
        period = periods.get(period_id)
        if period is None:
            continue
        ids = {a.assignment_id for a in period_assignments}
        coefficients = resolve_coefficients(user.organization_id, period.pk)
        scored = score_assignments(
            period_assignments,
            [r for r in responses if r.assignment_id in ids],
            coefficients, lang, labels,
        )
        if not scored:
            continue
        target = scored[0]
        prog = progress.get(period_id, {"expected": 0, "completed": 0})
        target = replace(target, confidence=estimate_confidence(prog["completed"], coefficients.min_high_confidence))

        data = target.as_dict(include_evaluations=False)
        data.update({
            "period_id": period_id,
            "period_name": period_label(period, lang),
            "peer_expected_count": prog["expected"],
            "peer_completed_count": prog["completed"],
            "confidence_min_high": coefficients.min_high_confidence,
            "deviation": coefficients.deviation.as_dict(),
            "evaluations": _summary_rows(target, prog, lang),
        })
        results.append((_latest_completion(target), labels.apply(data)))

    results.sort(key=lambda pair: pair[0].timestamp() if pair[0] else 0, reverse=True)
    return [data for _, data in results]


# ── development plan ──────────────────────────────────────────────────────
def user_periods(user, lang="en") -> List[dict]:
    """Periods in which ``user`` has completed evaluations, most recent first."""
    with _db_guard("assignments"):
        rows = (Assignment.objects
                .filter(target=user, status=AssignmentStatus.COMPLETED)
                .select_related("period")
                .order_by("-completed_at"))
        seen, out = set(), []
        for a in rows:
            if a.period_id in seen:
                continue
            seen.add(a.period_id)
            out.append({"id": str(a.period_id), "name": period_label(a.period, lang)})
    return out


def compute_development_plan(user, period_id=None, lang=None) -> dict:
    lang = normalize_language(lang or getattr(user, "preferred_language", None))
    periods = user_periods(user, lang)
    if not period_id:
        return {"periods": periods}

    period = load_period(period_id, user.organization_id)
    assignments, responses = load_records(
        Assignment.objects.filter(target=user, period=period, status=AssignmentStatus.COMPLETED)
    )
    payload = {"periods": periods, "period_name": period_label(period, lang), "plan": None}
    if not assignments:
        return payload

    labels = CategoryLabels.load(lang)
    coefficients = resolve_coefficients(user.organization_id, period.pk)
    evaluations = aggregate_evaluations(assignments, responses, build_resolver(responses))
    plan = build_development_plan(compare_categories(evaluations, coefficients), lang, labels)
    payload["plan"] = plan.as_dict(labels)
    return payload
