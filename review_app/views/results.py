from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from review_app.permissions import IsAdminRole, scoped_org_id
from review_app.serializers.report_serializers import DevelopmentQuerySerializer, ResultsRequestSerializer
from review_app.services.results import (
    compute_development_plan, compute_period_results, compute_user_results,
)
from review_app.utils import language_param
from review_app.views.base import ScoringErrorMixin


class ResultsViewSet(ScoringErrorMixin, viewsets.ViewSet):
    """
    • POST /results/                           → admin results of a period
    • GET  /results/mine/?lang=                → the caller's own results by period
    • GET  /results/development/?period_id=    → the caller's development plan
    """
    permission_classes = [IsAuthenticated]

    def get_permissions(self):
        if self.action == "create":
            return [IsAuthenticated(), IsAdminRole()]
        return super().get_permissions()

    def create(self, request):
        ser = ResultsRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        org_id = scoped_org_id(request.user, data.get("org_id"))
        payload = compute_period_results(
            org_id,
            data["period_id"],
            person_id=data.get("person_id"),
            lang=language_param(request, data.get("lang")),
        )
        return Response(payload)

    @action(detail=False, methods=["get"], url_path="mine")
    def mine(self, request):
        results = compute_user_results(request.user, language_param(request))
        return Response({"results": results})

    @action(detail=False, methods=["get"], url_path="development")
    def development(self, request):
        ser = DevelopmentQuerySerializer(data=request.query_params)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        payload = compute_development_plan(
            request.user,
            period_id=data.get("period_id"),
            lang=language_param(request, data.get("lang")),
        )
        return Response(payload)
