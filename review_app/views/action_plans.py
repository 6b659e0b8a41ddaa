from rest_framework import mixins, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.models import Role
from review_app.filters import ActionPlanFilter
from review_app.models import ActionPlan
from review_app.permissions import IsAdminRole, scoped_org_id
from review_app.serializers.report_serializers import ActionPlanSerializer, GeneratePlansSerializer
from review_app.services.action_plans import generate_action_plans
from review_app.views.base import ScoringErrorMixin


class ActionPlanViewSet(
    ScoringErrorMixin,
    mixins.ListModelMixin, mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin, viewsets.GenericViewSet
    ):
    """
    • GET   /action-plans/             → own plans (admins: their organization)
    • PATCH /action-plans/{id}/        → update status / items / title
    • POST  /action-plans/generate/    → create development plans from results
    """
    queryset = ActionPlan.objects.select_related("user", "period").order_by("-created_at")
    serializer_class = ActionPlanSerializer
    filterset_class = ActionPlanFilter
    lookup_field = "action_plan_id"
    permission_classes = [IsAuthenticated]

    def get_permissions(self):
        if self.action == "generate":
            return [IsAuthenticated(), IsAdminRole()]
        return super().get_permissions()

    def get_queryset(self):
        qs = super().get_queryset()
        u = self.request.user
        if u.role == Role.SUPER_ADMIN:
            return qs
        if u.role == Role.ORG_ADMIN:
            return qs.filter(user__organization_id=u.organization_id)
        return qs.filter(user=u)

    @action(detail=False, methods=["post"], url_path="generate")
    def generate(self, request):
        ser = GeneratePlansSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        result = generate_action_plans(
            scoped_org_id(request.user, data.get("org_id")),
            period_id=data.get("period_id"),
            limit=data.get("limit"),
        )
        return Response(result)
