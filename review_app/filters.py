import django_filters as filters
from review_app.models import ActionPlan, CategoryWeight, EvaluatorWeight


class EvaluatorWeightFilter(filters.FilterSet):
    org_id         = filters.UUIDFilter(field_name="organization__organization_id", lookup_expr="exact")
    defaults       = filters.BooleanFilter(field_name="organization", lookup_expr="isnull")
    position_level = filters.CharFilter(field_name="position_level", lookup_expr="exact")

    class Meta:
        model = EvaluatorWeight
        fields = ["org_id", "defaults", "position_level"]


class CategoryWeightFilter(filters.FilterSet):
    org_id        = filters.UUIDFilter(field_name="organization__organization_id", lookup_expr="exact")
    defaults      = filters.BooleanFilter(field_name="organization", lookup_expr="isnull")
    category_name = filters.CharFilter(field_name="category_name", lookup_expr="iexact")

    class Meta:
        model = CategoryWeight
        fields = ["org_id", "defaults", "category_name"]


class ActionPlanFilter(filters.FilterSet):
    period_id = filters.UUIDFilter(field_name="period__period_id", lookup_expr="exact")
    user_id   = filters.UUIDFilter(field_name="user__user_id", lookup_expr="exact")
    status    = filters.CharFilter(field_name="status", lookup_expr="exact")
    source    = filters.CharFilter(field_name="source", lookup_expr="exact")

    class Meta:
        model = ActionPlan
        fields = ["period_id", "user_id", "status", "source"]
