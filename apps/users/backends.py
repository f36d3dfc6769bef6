import logging

from django.contrib.auth.backends import ModelBackend

from apps.users.models import User

logger = logging.getLogger(__name__)


class EmailAuthenticationBackend(ModelBackend):
    """
    Authenticate users by email, refusing locked accounts
    """

    def authenticate(self, request, email=None, password=None, **kwargs):
        email = email or kwargs.get(User.USERNAME_FIELD)
        if email is None or password is None:
            return None

        email = email.lower().strip()
        try:
            user = User.objects.get(email=email)
        except User.DoesNotExist:
            # Hash anyway to keep timing similar for unknown emails
            User().set_password(password)
            logger.info("Failed login for unknown email %s", email)
            return None

        if user.locked:
            logger.warning("Refused login of locked user %s", email)
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user

        logger.info("Failed login for %s", email)
        return None

    def user_can_authenticate(self, user):
        return super().user_can_authenticate(user) and not getattr(user, 'locked', False)
