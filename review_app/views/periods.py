import logging

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from review_app.models import EvaluationPeriod
from review_app.permissions import IsAdminRole
from review_app.serializers.report_serializers import PeriodSerializer, SnapshotRequestSerializer
from review_app.services.coefficients import resolve_coefficients, snapshot_period_coefficients
from review_app.views.base import OrgScopedQuerysetMixin, ScoringErrorMixin

logger = logging.getLogger(__name__)


class PeriodViewSet(ScoringErrorMixin, OrgScopedQuerysetMixin, viewsets.ReadOnlyModelViewSet):
    """
    • GET  /periods/                                   → periods of the caller's organization
    • GET  /periods/{period_id}/coefficients/          → effective coefficients
    • POST /periods/{period_id}/snapshot-coefficients/ → freeze current coefficients
    """
    queryset = EvaluationPeriod.objects.select_related("organization", "scoring_settings").order_by("-start_date", "name")
    serializer_class = PeriodSerializer
    lookup_field = "period_id"
    permission_classes = [IsAuthenticated]
    include_defaults = False

    def get_permissions(self):
        if self.action in ("coefficients", "snapshot_coefficients"):
            return [IsAuthenticated(), IsAdminRole()]
        return super().get_permissions()

    @action(detail=True, methods=["get"], url_path="coefficients")
    def coefficients(self, request, period_id=None):
        period = self.get_object()
        coeffs = resolve_coefficients(period.organization_id, period.pk)
        return Response(coeffs.as_dict())

    @action(detail=True, methods=["post"], url_path="snapshot-coefficients")
    def snapshot_coefficients(self, request, period_id=None):
        period = self.get_object()
        ser = SnapshotRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        result = snapshot_period_coefficients(period, overwrite=ser.validated_data["overwrite"])
        logger.info("Snapshot of period %s requested by %s: %s", period.pk, request.user.pk, result)
        code = status.HTTP_201_CREATED if result["snapshotted"] else status.HTTP_200_OK
        return Response({"period_id": str(period.pk), **result}, status=code)
