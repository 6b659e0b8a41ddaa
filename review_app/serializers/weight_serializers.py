from rest_framework import serializers

from accounts.models import Organization, Role
from review_app.models import CategoryWeight, EvaluatorLevel, EvaluatorWeight
from review_app.utils import LabelChoiceField


class _OrgScopedWeightSerializer(serializers.ModelSerializer):
    """
    ``org_id`` null/absent means a system default row. Org admins always
    write into their own organization.
    """
    org_id = serializers.PrimaryKeyRelatedField(
        source="organization", queryset=Organization.objects.all(),
        required=False, allow_null=True,
    )
    weight = serializers.DecimalField(max_digits=6, decimal_places=3, min_value=0)

    def validate(self, attrs):
        request = self.context.get("request")
        user = getattr(request, "user", None)
        if user is not None and user.role == Role.ORG_ADMIN:
            attrs["organization"] = user.organization
        return attrs


class EvaluatorWeightSerializer(_OrgScopedWeightSerializer):
    position_level = LabelChoiceField(choices=EvaluatorLevel.choices)

    class Meta:
        model = EvaluatorWeight
        fields = ["id", "org_id", "position_level", "weight", "created_at"]
        read_only_fields = ("id", "created_at")


class CategoryWeightSerializer(_OrgScopedWeightSerializer):
    class Meta:
        model = CategoryWeight
        fields = ["id", "org_id", "category_name", "weight", "created_at"]
        read_only_fields = ("id", "created_at")

    def validate_category_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("category_name may not be blank.")
        return value
