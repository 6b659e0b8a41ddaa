import logging

from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from review_app.filters import CategoryWeightFilter, EvaluatorWeightFilter
from review_app.models import CategoryWeight, EvaluatorWeight
from review_app.permissions import OrgScopedObject, ReadOnlyOrAdminRole
from review_app.serializers.weight_serializers import CategoryWeightSerializer, EvaluatorWeightSerializer
from review_app.views.base import OrgScopedQuerysetMixin, ScoringErrorMixin

logger = logging.getLogger(__name__)


class _WeightViewSet(ScoringErrorMixin, OrgScopedQuerysetMixin, viewsets.ModelViewSet):
    """
    Live coefficient rows. Snapshotted periods are not affected by edits here.

    • GET  /{prefix}/?org_id=&defaults=   → list (own org + system defaults)
    • POST /{prefix}/                     → add a row (the newest row per key wins)
    • PUT / PATCH / DELETE /{prefix}/{id}/
    """
    permission_classes = [IsAuthenticated, ReadOnlyOrAdminRole, OrgScopedObject]

    def get_queryset(self):
        return super().get_queryset().select_related("organization")

    def perform_create(self, serializer):
        obj = serializer.save()
        logger.info("%s %s created by %s", type(obj).__name__, obj.pk, self.request.user.pk)

    def perform_destroy(self, instance):
        logger.info("%s %s deleted by %s", type(instance).__name__, instance.pk, self.request.user.pk)
        instance.delete()


class EvaluatorWeightViewSet(_WeightViewSet):
    queryset = EvaluatorWeight.objects.all()
    serializer_class = EvaluatorWeightSerializer
    filterset_class = EvaluatorWeightFilter


class CategoryWeightViewSet(_WeightViewSet):
    queryset = CategoryWeight.objects.all()
    serializer_class = CategoryWeightSerializer
    filterset_class = CategoryWeightFilter
