import uuid

from django.conf import settings
from django.db import models

from apps.core.managers import AuditManager


class UUIDModel(models.Model):
    """
    UUID primary key, stable across tenant schemas
    """
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        unique=True,
        verbose_name='Universal ID'
    )

    class Meta:
        abstract = True

    @property
    def short_id(self):
        """Short identifier for logging and display"""
        return str(self.id)[:8]


class TimeStampedModel(models.Model):
    """
    Creation/modification timestamps and the users behind them
    """
    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        verbose_name='Creation Timestamp'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name='Last Modification Timestamp'
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        editable=False,
        related_name='%(app_label)s_%(class)s_created',
        verbose_name='Created By'
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        editable=False,
        related_name='%(app_label)s_%(class)s_updated',
        verbose_name='Last Modified By'
    )

    class Meta:
        abstract = True
        ordering = ['-created_at']

    def stamp(self):
        """Record the acting user on the row"""
        from apps.core.utils.tenant import get_current_user

        user = get_current_user()
        if user is None or not getattr(user, 'is_authenticated', False) or user.pk is None:
            return
        if self._state.adding and not self.created_by_id:
            self.created_by = user
        self.updated_by = user


class BaseModel(UUIDModel, TimeStampedModel):
    """
    Base for every business record: UUID key, stamps, validation on save
    """
    objects = AuditManager()

    class Meta:
        abstract = True
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.__class__.__name__}[{self.short_id}]"

    def save(self, *args, **kwargs):
        """
        Run model validation before every full save
        """
        self.stamp()
        if not kwargs.get('update_fields'):
            self.full_clean()
        super().save(*args, **kwargs)


class NumberedModel(models.Model):
    """
    Records identified by a human readable, sequential ``number``
    """
    number_prefix = ''
    number_width = 5

    number = models.CharField(max_length=60, unique=True, blank=True, db_index=True)

    class Meta:
        abstract = True

    def generate_number(self):
        """Generate the next number after the last one using the same prefix"""
        # The concrete table holding the column, shared by inheriting models
        model = self._meta.get_field('number').model
        prefix = self.number_prefix
        numbers = (
            model._default_manager.filter(number__startswith=prefix)
            .exclude(pk=self.pk)
            .values_list('number', flat=True)
        )

        # Compared as integers, "P100000" follows "P99999"
        suffixes = (number[len(prefix):] for number in numbers)
        new_num = max((int(suffix) for suffix in suffixes if suffix.isdigit()), default=0) + 1
        return f"{prefix}{new_num:0{self.number_width}d}"

    def clean_fields(self, exclude=None):
        if not self.number:
            self.number = self.generate_number()
        super().clean_fields(exclude=exclude)
