from rest_framework.permissions import BasePermission, SAFE_METHODS

from accounts.models import Role
from review_app.services.errors import ValidationError


class IsAdminRole(BasePermission):
    """
    Grants permission when the user is SUPER_ADMIN **or** ORG_ADMIN.
    """
    def has_permission(self, request, view):
        return request.user.is_authenticated and request.user.is_admin_role


class ReadOnlyOrAdminRole(BasePermission):
    """
    - SAFE methods (GET / HEAD / OPTIONS) → every authenticated user.
    - Mutating methods (POST / PUT / PATCH / DELETE) → admins only.
    """
    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated):
            return False
        if request.method in SAFE_METHODS:
            return True
        return request.user.role in (Role.SUPER_ADMIN, Role.ORG_ADMIN)


class OrgScopedObject(BasePermission):
    """
    Org admins may only touch rows of their own organization.
    System default rows (organization = NULL) are super-admin only.
    """
    def has_object_permission(self, request, view, obj):
        user = request.user
        if user.role == Role.SUPER_ADMIN or request.method in SAFE_METHODS:
            return True
        org_id = getattr(obj, "organization_id", None)
        if org_id is None and hasattr(obj, "period"):
            org_id = obj.period.organization_id
        return org_id is not None and org_id == user.organization_id


def scoped_org_id(user, requested=None):
    """
    Organization an admin request is allowed to act on.

    Org admins are pinned to their own organization whatever they send;
    super admins must name one.
    """
    if user.role == Role.ORG_ADMIN:
        return user.organization_id
    if not requested:
        raise ValidationError("org_id is required.", hint="Send the org_id of the organization to report on.")
    return requested
