import logging

from rest_framework import exceptions, status
from rest_framework.response import Response

from accounts.models import Role
from review_app.services.errors import ScoringError

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    "validation_error": status.HTTP_400_BAD_REQUEST,
    "configuration_error": status.HTTP_400_BAD_REQUEST,
    "not_found": status.HTTP_404_NOT_FOUND,
    "data_unavailable": status.HTTP_503_SERVICE_UNAVAILABLE,
}


class ScoringErrorMixin:
    """Renders scoring errors and DRF validation/permission errors as {error, kind, hint}."""

    def handle_exception(self, exc):
        if isinstance(exc, ScoringError):
            code = STATUS_BY_KIND.get(exc.kind, status.HTTP_400_BAD_REQUEST)
            logger.info("%s %s -> %s: %s", self.request.method, self.request.path, exc.kind, exc.message)
            return Response(exc.as_dict(), status=code)
        if isinstance(exc, exceptions.ValidationError):
            return Response(
                {
                    "error": "Invalid request parameters.",
                    "kind": "validation_error",
                    "hint": "Fix the fields listed in `fields` and retry.",
                    "fields": exc.detail,
                },
                status=status.HTTP_400_BAD_REQUEST,
            )
        if isinstance(exc, exceptions.PermissionDenied) and self.request.user.is_authenticated:
            return Response(
                {
                    "error": str(exc.detail),
                    "kind": "forbidden",
                    "hint": "This action is limited to administrators of the organization.",
                },
                status=status.HTTP_403_FORBIDDEN,
            )
        return super().handle_exception(exc)


class OrgScopedQuerysetMixin:
    """
    Super admins see every row; everyone else sees rows of their own
    organization plus the system defaults (organization = NULL).
    """
    org_lookup = "organization"
    include_defaults = True

    def get_queryset(self):
        qs = super().get_queryset()
        u = self.request.user
        if u.role == Role.SUPER_ADMIN:
            return qs
        q = qs.filter(**{self.org_lookup: u.organization_id})
        if self.include_defaults:
            q = q | qs.filter(**{f"{self.org_lookup}__isnull": True})
        return q
