from django.db import models
import uuid
from django.utils import timezone
from django.contrib.auth.models import AbstractUser


class Role(models.TextChoices):
    SUPER_ADMIN = "SUPER_ADMIN", "Super Admin"
    ORG_ADMIN   = "ORG_ADMIN",   "Organization Admin"
    USER        = "USER",        "User"


class PositionLevel(models.TextChoices):
    EXECUTIVE   = "executive",   "Executive"
    MANAGER     = "manager",     "Manager"
    PEER        = "peer",        "Peer"
    SUBORDINATE = "subordinate", "Subordinate"


class UserStatus(models.TextChoices):
    ACTIVE   = "active",   "Active"
    INACTIVE = "inactive", "Inactive"


class Language(models.TextChoices):
    TR = "tr", "Türkçe"
    EN = "en", "English"
    FR = "fr", "Français"


class Organization(models.Model):
    organization_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name            = models.CharField(max_length=180, unique=True)
    created_at      = models.DateTimeField(default=timezone.now)

    def __str__(self):
        return self.name


class User(AbstractUser):
    user_id        = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name           = models.CharField(max_length=120)
    email          = models.EmailField(unique=True)
    phone          = models.CharField(max_length=30, blank=True)
    organization   = models.ForeignKey(Organization, on_delete=models.SET_NULL, null=True, blank=True, related_name="members")
    title          = models.CharField(max_length=120, blank=True)
    department     = models.CharField(max_length=120, blank=True)
    # direct manager; drives the "manager" compensation pool
    manager        = models.ForeignKey("self", on_delete=models.SET_NULL, null=True, blank=True, related_name="reports")
    position_level = models.CharField(max_length=12, choices=PositionLevel.choices, default=PositionLevel.PEER)
    role           = models.CharField(max_length=12, choices=Role.choices, default=Role.USER)
    status         = models.CharField(max_length=8, choices=UserStatus.choices, default=UserStatus.ACTIVE)
    preferred_language = models.CharField(max_length=2, choices=Language.choices, default=Language.EN)
    created_at     = models.DateTimeField(default=timezone.now)
    updated_at     = models.DateTimeField(auto_now=True)

    @property
    def is_admin_role(self):
        return self.role in (Role.SUPER_ADMIN, Role.ORG_ADMIN)

    def __str__(self):
        return self.name or self.email or self.username
