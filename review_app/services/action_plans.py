"""
Bulk creation of "development" action plans from finished evaluations.
"""
import logging
from datetime import timedelta

from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from accounts.models import UserStatus
from review_app.models import ActionPlan, Assignment, AssignmentStatus
from review_app.services.coefficients import resolve_coefficients
from review_app.services.errors import DataUnavailable
from review_app.services.messages import message, normalize_language
from review_app.services.numbers import round1
from review_app.services.results import (
    CategoryLabels, parse_uuid, load_records, score_assignments,
)
from review_app.services.swot import STRENGTH_THRESHOLD

logger = logging.getLogger(__name__)

SOURCE_DEVELOPMENT = "development"
MIN_LIMIT, MAX_LIMIT, DEFAULT_LIMIT = 10, 400, 200
WEAK_AREAS = 3
DUE_IN = timedelta(days=90)
MAX_SCORE = 5.0


def clamp_limit(limit) -> int:
    try:
        limit = int(limit or DEFAULT_LIMIT)
    except (TypeError, ValueError):
        limit = DEFAULT_LIMIT
    return min(MAX_LIMIT, max(MIN_LIMIT, limit))


def weakest_peer_areas(target, count=WEAK_AREAS):
    """Peer-rated categories below the strength threshold, weakest first."""
    weak = [c for c in target.category_compare if 0 < c.peer_score < STRENGTH_THRESHOLD]
    return sorted(weak, key=lambda c: c.peer_score)[:count]


def _pairs(org_id, period_id, limit):
    """Distinct (target, period) pairs with completed evaluations, newest first."""
    qs = (Assignment.objects
          .filter(status=AssignmentStatus.COMPLETED, target__organization_id=org_id)
          .exclude(target__status=UserStatus.INACTIVE)
          .select_related("target")
          .order_by("-completed_at"))
    if period_id:
        qs = qs.filter(period_id=period_id)

    seen, pairs = set(), []
    for a in qs.iterator():
        key = (a.target_id, a.period_id)
        if key in seen:
            continue
        seen.add(key)
        pairs.append((a.target, a.period_id))
        if len(pairs) >= limit:
            break
    return pairs


def _plan_items(areas, lang, labels):
    return [
        {
            "sort_order": idx,
            "area": c.name,
            "label": labels(c.name),
            "description": message("plan.item", lang, name=labels(c.name)),
            "status": "pending",
            "baseline_score": c.peer_score,
            "target_score": round1(min(MAX_SCORE, c.peer_score + 1)),
        }
        for idx, c in enumerate(areas, start=1)
    ]


def generate_action_plans(org_id, period_id=None, limit=DEFAULT_LIMIT) -> dict:
    """
    Create one draft development plan per (target, period) from the three
    weakest peer categories. Existing plans, inactive users and targets
    without a weak area are skipped.
    """
    oid = parse_uuid(org_id, "org_id")
    pid = parse_uuid(period_id, "period_id") if period_id else None
    limit = clamp_limit(limit)

    created = skipped = 0
    try:
        pairs = _pairs(oid, pid, limit)
        if not pairs:
            return {"created": 0, "skipped": 0}

        existing = set(
            ActionPlan.objects
            .filter(source=SOURCE_DEVELOPMENT,
                    user_id__in={u.pk for u, _ in pairs},
                    period_id__in={p for _, p in pairs})
            .values_list("user_id", "period_id")
        )
        now = timezone.now()
        labels_by_lang = {}
        for user, period_id_ in pairs:
            if (user.pk, period_id_) in existing:
                skipped += 1
                continue

            lang = normalize_language(user.preferred_language)
            if lang not in labels_by_lang:
                labels_by_lang[lang] = CategoryLabels.load(lang)
            labels = labels_by_lang[lang]
            assignments, responses = load_records(Assignment.objects.filter(
                target=user, period_id=period_id_, status=AssignmentStatus.COMPLETED,
            ))
            coefficients = resolve_coefficients(oid, period_id_)
            scored = score_assignments(assignments, responses, coefficients, lang, labels)
            areas = weakest_peer_areas(scored[0]) if scored else []
            if not areas:
                skipped += 1
                continue

            try:
                with transaction.atomic():
                    ActionPlan.objects.create(
                        user=user,
                        period_id=period_id_,
                        source=SOURCE_DEVELOPMENT,
                        title=message("plan.title", lang),
                        department=user.department or "",
                        items=_plan_items(areas, lang, labels),
                        due_at=now + DUE_IN,
                    )
            except IntegrityError:
                # created concurrently
                skipped += 1
                continue
            created += 1
    except DatabaseError as exc:
        logger.error("Action plan generation failed for org %s: %s", oid, exc)
        raise DataUnavailable(
            "Action plans could not be generated.",
            hint="Check that the action plan table is migrated.",
        ) from exc

    logger.info("Action plans for org %s: created=%d skipped=%d", oid, created, skipped)
    return {"created": created, "skipped": skipped}
