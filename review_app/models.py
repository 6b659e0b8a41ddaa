import uuid
from decimal import Decimal
from django.db import models
from django.utils import timezone
from django.conf import settings

from accounts.models import Organization

# ── Lookup / Enum helpers ────────────────────────────────────────────────

class EvaluatorLevel(models.TextChoices):
    """Position levels used as evaluator-weight keys ("self" marks self-evaluation)."""
    SELF        = "self",        "Self"
    EXECUTIVE   = "executive",   "Executive"
    MANAGER     = "manager",     "Manager"
    PEER        = "peer",        "Peer"
    SUBORDINATE = "subordinate", "Subordinate"

class PeriodStatus(models.TextChoices):
    ACTIVE    = "active",    "Active"
    INACTIVE  = "inactive",  "Inactive"
    COMPLETED = "completed", "Completed"

class AssignmentStatus(models.TextChoices):
    PENDING   = "pending",   "Pending"
    COMPLETED = "completed", "Completed"

class ActionPlanStatus(models.TextChoices):
    DRAFT       = "draft",       "Draft"
    IN_PROGRESS = "in_progress", "In progress"
    DONE        = "done",        "Done"


# ── Periods & catalog ────────────────────────────────────────────────────
class EvaluationPeriod(models.Model):
    period_id    = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    organization = models.ForeignKey(Organization, on_delete=models.CASCADE, related_name="periods")
    name         = models.CharField(max_length=120)
    name_en      = models.CharField(max_length=120, blank=True, null=True)
    name_fr      = models.CharField(max_length=120, blank=True, null=True)
    start_date   = models.DateField(null=True, blank=True)
    end_date     = models.DateField(null=True, blank=True)
    status       = models.CharField(max_length=10, choices=PeriodStatus.choices, default=PeriodStatus.ACTIVE)
    created_at   = models.DateTimeField(default=timezone.now)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["organization", "name"], name="uniq_period_name_per_org")
        ]

    def __str__(self):
        return self.name


class MainCategory(models.Model):
    main_category_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name             = models.CharField(max_length=120)
    name_en          = models.CharField(max_length=120, blank=True, null=True)
    name_fr          = models.CharField(max_length=120, blank=True, null=True)
    is_active        = models.BooleanField(default=True)
    created_at       = models.DateTimeField(default=timezone.now)

    class Meta:
        verbose_name_plural = "Main categories"

    def __str__(self):
        return self.name


class QuestionCategory(models.Model):
    category_id   = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    main_category = models.ForeignKey(MainCategory, on_delete=models.SET_NULL, null=True, blank=True, related_name="categories")
    # canonical key used by every score aggregation
    name          = models.CharField(max_length=120)
    name_en       = models.CharField(max_length=120, blank=True, null=True)
    name_fr       = models.CharField(max_length=120, blank=True, null=True)
    created_at    = models.DateTimeField(default=timezone.now)

    class Meta:
        verbose_name_plural = "Question categories"

    def __str__(self):
        return self.name


class Question(models.Model):
    question_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    category    = models.ForeignKey(QuestionCategory, on_delete=models.SET_NULL, null=True, blank=True, related_name="questions")
    text        = models.TextField()
    order_num   = models.PositiveIntegerField(default=0)
    created_at  = models.DateTimeField(default=timezone.now)

    def __str__(self):
        return self.text[:60]


# ── Assignments & responses ──────────────────────────────────────────────
class Assignment(models.Model):
    assignment_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    period        = models.ForeignKey(EvaluationPeriod, on_delete=models.CASCADE, related_name="assignments")
    evaluator     = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="given_assignments")
    target        = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="received_assignments")
    status        = models.CharField(max_length=10, choices=AssignmentStatus.choices, default=AssignmentStatus.PENDING)
    completed_at  = models.DateTimeField(null=True, blank=True)
    created_at    = models.DateTimeField(default=timezone.now)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["period", "evaluator", "target"], name="uniq_assignment_per_period")
        ]

    @property
    def is_self(self):
        return self.evaluator_id == self.target_id


class EvaluationResponse(models.Model):
    response_id   = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    assignment    = models.ForeignKey(Assignment, on_delete=models.CASCADE, related_name="responses")
    question      = models.ForeignKey(Question, on_delete=models.SET_NULL, null=True, blank=True, related_name="responses")
    category      = models.ForeignKey(QuestionCategory, on_delete=models.SET_NULL, null=True, blank=True, related_name="responses")
    # category name as stored when the answer was recorded
    category_name = models.CharField(max_length=120, blank=True, null=True)
    std_score     = models.DecimalField(max_digits=4, decimal_places=2, null=True, blank=True)
    reel_score    = models.DecimalField(max_digits=4, decimal_places=2, null=True, blank=True)
    created_at    = models.DateTimeField(default=timezone.now)


# ── Coefficients (live) ──────────────────────────────────────────────────
class EvaluatorWeight(models.Model):
    """organization = NULL rows are the system defaults."""
    organization   = models.ForeignKey(Organization, on_delete=models.CASCADE, null=True, blank=True, related_name="evaluator_weights")
    position_level = models.CharField(max_length=12, choices=EvaluatorLevel.choices)
    weight         = models.DecimalField(max_digits=6, decimal_places=3, default=1)
    created_at     = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at"]


class CategoryWeight(models.Model):
    organization  = models.ForeignKey(Organization, on_delete=models.CASCADE, null=True, blank=True, related_name="category_weights")
    category_name = models.CharField(max_length=120)
    weight        = models.DecimalField(max_digits=6, decimal_places=3, default=1)
    created_at    = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at"]


class ConfidenceSettings(models.Model):
    organization = models.OneToOneField(Organization, on_delete=models.CASCADE, related_name="confidence_settings")
    min_high_confidence_evaluator_count = models.PositiveSmallIntegerField(default=5)
    updated_at   = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "Confidence settings"


class DeviationSettings(models.Model):
    # loaded and reported, not applied to any score
    organization           = models.OneToOneField(Organization, on_delete=models.CASCADE, related_name="deviation_settings")
    lenient_diff_threshold = models.DecimalField(max_digits=5, decimal_places=3, default=Decimal("0.75"))
    harsh_diff_threshold   = models.DecimalField(max_digits=5, decimal_places=3, default=Decimal("0.75"))
    lenient_multiplier     = models.DecimalField(max_digits=5, decimal_places=3, default=Decimal("0.85"))
    harsh_multiplier       = models.DecimalField(max_digits=5, decimal_places=3, default=Decimal("1.15"))
    updated_at             = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "Deviation settings"


# ── Coefficients (period snapshot) ───────────────────────────────────────
class PeriodScoringSettings(models.Model):
    """Presence of this row marks the period as snapshotted."""
    period                 = models.OneToOneField(EvaluationPeriod, on_delete=models.CASCADE, related_name="scoring_settings")
    min_high_confidence_evaluator_count = models.PositiveSmallIntegerField(default=5)
    lenient_diff_threshold = models.DecimalField(max_digits=5, decimal_places=3, default=Decimal("0.75"))
    harsh_diff_threshold   = models.DecimalField(max_digits=5, decimal_places=3, default=Decimal("0.75"))
    lenient_multiplier     = models.DecimalField(max_digits=5, decimal_places=3, default=Decimal("0.85"))
    harsh_multiplier       = models.DecimalField(max_digits=5, decimal_places=3, default=Decimal("1.15"))
    standard_weight        = models.DecimalField(max_digits=5, decimal_places=3, default=Decimal("0.15"))
    snapshotted_at         = models.DateTimeField(default=timezone.now)

    class Meta:
        verbose_name_plural = "Period scoring settings"


class PeriodEvaluatorWeight(models.Model):
    period         = models.ForeignKey(EvaluationPeriod, on_delete=models.CASCADE, related_name="evaluator_weights")
    position_level = models.CharField(max_length=12, choices=EvaluatorLevel.choices)
    weight         = models.DecimalField(max_digits=6, decimal_places=3, default=1)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["period", "position_level"], name="uniq_period_evaluator_level")
        ]


class PeriodCategoryWeight(models.Model):
    period        = models.ForeignKey(EvaluationPeriod, on_delete=models.CASCADE, related_name="category_weights")
    category_name = models.CharField(max_length=120)
    weight        = models.DecimalField(max_digits=6, decimal_places=3, default=1)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["period", "category_name"], name="uniq_period_category")
        ]


# ── Action plans ─────────────────────────────────────────────────────────
class ActionPlan(models.Model):
    action_plan_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user           = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="action_plans")
    period         = models.ForeignKey(EvaluationPeriod, on_delete=models.CASCADE, related_name="action_plans")
    source         = models.CharField(max_length=20, default="development")
    status         = models.CharField(max_length=12, choices=ActionPlanStatus.choices, default=ActionPlanStatus.DRAFT)
    title          = models.CharField(max_length=160, blank=True)
    department     = models.CharField(max_length=120, blank=True)
    # [{sort_order, area, description, status, baseline_score, target_score}]
    items          = models.JSONField(default=list, blank=True)
    due_at         = models.DateTimeField(null=True, blank=True)
    created_at     = models.DateTimeField(default=timezone.now)
    updated_at     = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["user", "period", "source"], name="uniq_action_plan_per_source")
        ]
