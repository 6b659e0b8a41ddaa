from django.contrib import admin
from . import models as m
from .services.coefficients import snapshot_period_coefficients


# ───────────────────────────────
#  Inline helpers
# ───────────────────────────────
class EvaluationResponseInline(admin.TabularInline):
    model = m.EvaluationResponse
    extra = 0
    fields = ("question", "category", "category_name", "std_score", "reel_score")
    autocomplete_fields = ["question", "category"]


class PeriodEvaluatorWeightInline(admin.TabularInline):
    model = m.PeriodEvaluatorWeight
    extra = 0


class PeriodCategoryWeightInline(admin.TabularInline):
    model = m.PeriodCategoryWeight
    extra = 0


# ───────────────────────────────
#  Periods
# ───────────────────────────────
@admin.action(description="Snapshot coefficients (overwrite)")
def snapshot_coefficients(modeladmin, request, queryset):
    for period in queryset:
        snapshot_period_coefficients(period, overwrite=True)
    modeladmin.message_user(request, f"Snapshotted {queryset.count()} period(s).")


@admin.register(m.EvaluationPeriod)
class EvaluationPeriodAdmin(admin.ModelAdmin):
    list_display = ("name", "organization", "status", "start_date", "end_date")
    list_filter = ("status", "organization")
    search_fields = ("name", "name_en", "name_fr")
    inlines = [PeriodEvaluatorWeightInline, PeriodCategoryWeightInline]
    actions = [snapshot_coefficients]


@admin.register(m.PeriodScoringSettings)
class PeriodScoringSettingsAdmin(admin.ModelAdmin):
    list_display = ("period", "min_high_confidence_evaluator_count", "standard_weight", "snapshotted_at")


# ───────────────────────────────
#  Catalog
# ───────────────────────────────
@admin.register(m.MainCategory)
class MainCategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "name_en", "name_fr", "is_active")
    search_fields = ("name", "name_en", "name_fr")


@admin.register(m.QuestionCategory)
class QuestionCategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "name_en", "name_fr", "main_category")
    search_fields = ("name", "name_en", "name_fr")


@admin.register(m.Question)
class QuestionAdmin(admin.ModelAdmin):
    list_display = ("text", "category", "order_num")
    list_filter = ("category",)
    search_fields = ("text",)


# ───────────────────────────────
#  Assignments
# ───────────────────────────────
@admin.register(m.Assignment)
class AssignmentAdmin(admin.ModelAdmin):
    list_display = ("period", "evaluator", "target", "status", "completed_at")
    list_filter = ("status", "period")
    search_fields = ("evaluator__name", "target__name", "evaluator__email", "target__email")
    autocomplete_fields = ["evaluator", "target"]
    inlines = [EvaluationResponseInline]


# ───────────────────────────────
#  Coefficients
# ───────────────────────────────
@admin.register(m.EvaluatorWeight)
class EvaluatorWeightAdmin(admin.ModelAdmin):
    list_display = ("position_level", "weight", "organization", "created_at")
    list_filter = ("position_level", "organization")


@admin.register(m.CategoryWeight)
class CategoryWeightAdmin(admin.ModelAdmin):
    list_display = ("category_name", "weight", "organization", "created_at")
    list_filter = ("organization",)
    search_fields = ("category_name",)


@admin.register(m.ConfidenceSettings)
class ConfidenceSettingsAdmin(admin.ModelAdmin):
    list_display = ("organization", "min_high_confidence_evaluator_count", "updated_at")


@admin.register(m.DeviationSettings)
class DeviationSettingsAdmin(admin.ModelAdmin):
    list_display = ("organization", "lenient_diff_threshold", "harsh_diff_threshold",
                    "lenient_multiplier", "harsh_multiplier")


# ───────────────────────────────
#  Action plans
# ───────────────────────────────
@admin.register(m.ActionPlan)
class ActionPlanAdmin(admin.ModelAdmin):
    list_display = ("user", "period", "title", "status", "due_at")
    list_filter = ("status", "source", "period")
    search_fields = ("user__name", "user__email", "department")
