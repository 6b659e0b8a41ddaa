from django.conf import settings
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from review_app.permissions import IsAdminRole, scoped_org_id
from review_app.serializers.report_serializers import CompensationQuerySerializer
from review_app.services.errors import NotFoundError
from review_app.services.results import compute_compensation
from review_app.utils import language_param
from review_app.views.base import ScoringErrorMixin


class CompensationViewSet(ScoringErrorMixin, viewsets.ViewSet):
    """
    • GET /compensation/recommendations/?period_id=&org_id=&scope=&min=&max=&lang=
    """
    permission_classes = [IsAuthenticated, IsAdminRole]

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        if not getattr(settings, "COMPENSATION_ENABLED", False):
            raise NotFoundError(
                "Compensation recommendations are disabled.",
                hint="Set COMPENSATION_ENABLED=true to turn the feature on.",
            )

    @action(detail=False, methods=["get"], url_path="recommendations")
    def recommendations(self, request):
        ser = CompensationQuerySerializer(data=request.query_params)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        payload = compute_compensation(
            scoped_org_id(request.user, data.get("org_id")),
            data["period_id"],
            pool=data["scope"],
            min_pct=data["min"],
            max_pct=data["max"],
            lang=language_param(request, data.get("lang")),
        )
        return Response(payload)
