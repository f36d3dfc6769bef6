from django.db import models
from django.utils import timezone


class AuditQuerySet(models.QuerySet):
    """
    Queryset keeping audit columns current on bulk updates
    """
    def update(self, **kwargs):
        from apps.core.utils.tenant import get_current_user

        user = get_current_user()
        if user is not None and getattr(user, 'is_authenticated', False) and user.pk is not None:
            kwargs.setdefault('updated_by', user)
        kwargs.setdefault('updated_at', timezone.now())
        return super().update(**kwargs)


class AuditManager(models.Manager.from_queryset(AuditQuerySet)):
    """
    Default manager for models carrying audit columns
    """
    pass
