from rest_framework import serializers

from accounts.models import Language
from review_app.models import ActionPlan, EvaluationPeriod
from review_app.services.compensation_math import POOLS, POOL_ORG

MAX_PCT = 200


class ResultsRequestSerializer(serializers.Serializer):
    period_id = serializers.UUIDField()
    org_id    = serializers.UUIDField(required=False, allow_null=True)
    person_id = serializers.UUIDField(required=False, allow_null=True)
    lang      = serializers.ChoiceField(choices=Language.choices, required=False)


class DevelopmentQuerySerializer(serializers.Serializer):
    period_id = serializers.UUIDField(required=False, allow_null=True)
    lang      = serializers.ChoiceField(choices=Language.choices, required=False)


class CompensationQuerySerializer(serializers.Serializer):
    period_id = serializers.UUIDField()
    org_id    = serializers.UUIDField(required=False, allow_null=True)
    scope     = serializers.ChoiceField(choices=POOLS, default=POOL_ORG)
    min       = serializers.FloatField(min_value=0, max_value=MAX_PCT, default=20)
    max       = serializers.FloatField(min_value=0, max_value=MAX_PCT, default=30)
    lang      = serializers.ChoiceField(choices=Language.choices, required=False)


class SnapshotRequestSerializer(serializers.Serializer):
    overwrite = serializers.BooleanField(default=True)


class GeneratePlansSerializer(serializers.Serializer):
    org_id    = serializers.UUIDField(required=False, allow_null=True)
    period_id = serializers.UUIDField(required=False, allow_null=True)
    limit     = serializers.IntegerField(required=False, default=200)


class ActionPlanSerializer(serializers.ModelSerializer):
    user_id   = serializers.UUIDField(source="user.user_id", read_only=True)
    user_name = serializers.CharField(source="user.name", read_only=True)
    period_id = serializers.UUIDField(source="period.period_id", read_only=True)

    class Meta:
        model = ActionPlan
        fields = [
            "action_plan_id", "user_id", "user_name", "period_id", "source",
            "title", "status", "department", "items", "due_at",
            "created_at", "updated_at",
        ]
        read_only_fields = (
            "action_plan_id", "user_id", "user_name", "period_id", "source",
            "department", "created_at", "updated_at",
        )


class PeriodSerializer(serializers.ModelSerializer):
    org_id      = serializers.UUIDField(source="organization.organization_id", read_only=True)
    snapshotted = serializers.SerializerMethodField()

    class Meta:
        model = EvaluationPeriod
        fields = [
            "period_id", "org_id", "name", "name_en", "name_fr",
            "start_date", "end_date", "status", "snapshotted",
        ]
        read_only_fields = fields

    def get_snapshotted(self, obj):
        return hasattr(obj, "scoring_settings")
