import logging

from django.contrib.auth.backends import ModelBackend
from django.contrib.auth import get_user_model

from accounts.models import UserStatus

User = get_user_model()
logger = logging.getLogger(__name__)


class FlexibleAuthBackend(ModelBackend):
    """
    Authenticate with e-mail or username plus password.

    Inactive review participants (status = inactive) cannot log in even
    when their Django ``is_active`` flag is still set.
    """
    def authenticate(self, request, username=None, password=None, **kwargs):
        email = kwargs.get("email")
        if not password or not (username or email):
            return None

        lookup = {"email__iexact": email} if email else {"username": username}
        try:
            user = User.objects.get(**lookup)
        except User.DoesNotExist:
            return None
        except User.MultipleObjectsReturned:
            logger.warning("Ambiguous login lookup %s", lookup)
            return None

        if username and email and user.username != username:
            return None
        if user.status == UserStatus.INACTIVE:
            return None
        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None

    def get_user(self, user_id):
        try:
            return User.objects.get(pk=user_id)
        except User.DoesNotExist:
            return None
