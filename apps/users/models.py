import hashlib
import logging
import secrets
from datetime import date, datetime
from decimal import Decimal

from django.conf import settings
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models, transaction
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime
from django.utils.translation import gettext as _

from apps.core.models import BaseModel, UUIDModel, TimeStampedModel
from apps.users.access import Access, MINIMUM, PUBLIC

logger = logging.getLogger(__name__)

PASSWORD_LETTERS = {
    'dummy': 'abcdefghjkmnopqrstuwxy346789',
    'simple': 'abcdefghjkmnopqrstuwxyABCDEFGHJKMNPQRTUWYX346789',
    'normal': 'abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWYXZ0123456789',
    'complex': 'abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWYXZ0123456789_=+-*|[]{}.:;!?,§%/&<>',
}


class RightableMixin:
    """
    Helpers over a ``rights`` mapping of resource to granted actions
    """

    def get_rights(self):
        return self.rights or {}

    @property
    def rights_array(self):
        """Granted rights as ``"<action>-<resource>"`` strings"""
        return [
            f"{action}-{resource}"
            for resource, actions in self.get_rights().items()
            for action in (actions or [])
        ]

    @property
    def resource_actions(self):
        return self.rights_array

    def right_exists(self, action, resource):
        return str(action) in (self.get_rights().get(str(resource)) or [])


class Role(RightableMixin, BaseModel):
    """
    Named set of rights, copied to users on assignment
    """
    name = models.CharField(max_length=255, unique=True)
    reference_name = models.CharField(max_length=255, blank=True)
    rights = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = 'roles'
        verbose_name = 'Role'
        verbose_name_plural = 'Roles'
        ordering = ['name']

    def __str__(self):
        return self.name

    def clean(self):
        super().clean()
        self.rights = Access.complete(self.rights)


class UserManager(BaseUserManager):
    """
    Email based user manager
    """
    use_in_migrations = True

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('The Email field must be set')

        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('administrator', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')

        return self.create_user(email, password, **extra_fields)

    def administrators(self):
        return self.get_queryset().filter(administrator=True)

    def employees(self):
        return self.get_queryset().filter(employed=True)


class User(RightableMixin, AbstractUser, UUIDModel, TimeStampedModel):
    """
    Person allowed to sign in, with rights copied from a role
    """
    username = None
    email = models.EmailField(unique=True, db_index=True)
    first_name = models.CharField(max_length=150)
    last_name = models.CharField(max_length=150)

    language = models.CharField(max_length=3, blank=True)
    administrator = models.BooleanField(default=False, db_index=True)
    commercial = models.BooleanField(default=False)
    employed = models.BooleanField(default=False, db_index=True)
    employment = models.CharField(max_length=255, blank=True)
    locked = models.BooleanField(default=False)
    maximal_grantable_reduction_percentage = models.DecimalField(
        max_digits=19,
        decimal_places=4,
        default=Decimal('5'),
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))]
    )
    rights = models.JSONField(default=dict, blank=True)
    role = models.ForeignKey(
        Role,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='users'
    )
    person = models.OneToOneField(
        'entities.Entity',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='user'
    )
    authentication_token = models.CharField(max_length=255, blank=True, db_index=True)
    description = models.TextField(blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['first_name', 'last_name']

    class Meta:
        db_table = 'users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        ordering = ['last_name', 'first_name']

    def __str__(self):
        return self.name

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def prepare(self):
        if not self.language:
            self.language = settings.LANGUAGE_CODE[:2]
        if self.maximal_grantable_reduction_percentage is None:
            self.maximal_grantable_reduction_percentage = Decimal('0')
        if not self.rights and self.role_id:
            self.rights = dict(self.role.rights)
        self.rights = Access.complete(self.rights)
        if self.email:
            self.email = self.email.strip().lower()

    def full_clean(self, *args, **kwargs):
        self.prepare()
        super().full_clean(*args, **kwargs)

    def clean(self):
        super().clean()
        errors = {}
        if not self.administrator and not self.role_id:
            errors['role'] = _('A role is required for non-administrators.')

        if not self._state.adding and self.pk:
            old = type(self).objects.filter(pk=self.pk).values('administrator', 'person_id').first()
            if old:
                if (old['administrator'] and not self.administrator
                        and type(self).objects.administrators().count() <= 1):
                    errors['administrator'] = _('At least one administrator is required.')
                if old['person_id'] and self.person_id != old['person_id']:
                    errors['person'] = _('The person of a user cannot be changed.')
        if errors:
            raise ValidationError(errors)

    def save(self, *args, **kwargs):
        from apps.entities.models import Entity

        if kwargs.get('update_fields'):
            return super().save(*args, **kwargs)

        self.stamp()
        self.full_clean()
        if not self.authentication_token:
            self.authentication_token = self.generate_authentication_token()
        with transaction.atomic():
            if not self.person_id:
                self.person = Entity.objects.create(
                    first_name=self.first_name,
                    last_name=self.last_name,
                    nature=Entity.NATURE_CONTACT,
                )
            super().save(*args, **kwargs)

    def is_destroyable(self):
        users = type(self).objects
        if self.administrator and users.administrators().count() <= 1:
            return False
        return users.count() > 1

    def delete(self, *args, **kwargs):
        if not self.is_destroyable():
            raise ValidationError(_('The last user or administrator cannot be deleted.'))
        return super().delete(*args, **kwargs)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def name(self):
        return f"{self.first_name} {self.last_name}"

    @property
    def full_name(self):
        return self.name

    @property
    def label(self):
        return self.name

    def avatar_url(self, size=200):
        """URL of the Gravatar avatar of the user"""
        digest = hashlib.md5(self.email.strip().lower().encode('utf-8')).hexdigest()
        return f"https://secure.gravatar.com/avatar/{digest}?size={size}"

    # ------------------------------------------------------------------
    # Preferences and notifications
    # ------------------------------------------------------------------

    def preference(self, name, default_value=None, nature=None):
        """Find the named preference, creating it with the default value"""
        preference = self.preferences.filter(name=name).first()
        if preference is None:
            preference = self.prefer(name, default_value, nature)
        return preference

    pref = preference

    def prefer(self, name, value, nature=None):
        preference = self.preferences.filter(name=name).first()
        if preference is None:
            preference = Preference(user=self, name=name)
        if nature and not preference.nature:
            preference.nature = nature
        preference.value = value
        preference.save()
        return preference

    def notify(self, message, interpolations=None, target=None, target_url='', level=None):
        """Create a notification for the user"""
        notification = Notification(
            recipient=self,
            message=message,
            interpolations=interpolations or {},
            target_url=target_url,
            level=level or Notification.LEVEL_INFORMATION,
        )
        if target is not None:
            notification.target = target
        notification.save()
        return notification

    @classmethod
    def notify_administrators(cls, *args, **kwargs):
        for user in cls.objects.administrators():
            user.notify(*args, **kwargs)

    @property
    def unread_notifications(self):
        return self.notifications.filter(read_at__isnull=True)

    # ------------------------------------------------------------------
    # Rights
    # ------------------------------------------------------------------

    def authorization(self, controller_name, action_name, rights_list=None):
        """
        ``None`` when the user may run the action, else the refusal message
        """
        rights_list = rights_list or self.rights_array
        controllers = Access.controllers()
        controller_name, action_name = str(controller_name), str(action_name)
        if controller_name not in controllers or action_name not in controllers[controller_name]:
            return _('No right defined for this part of the application (%(controller)s#%(action)s)') % {
                'controller': controller_name,
                'action': action_name,
            }
        rights = Access.rights_of(f"{controller_name}#{action_name}")
        if (not set(rights) & {MINIMUM, PUBLIC} and not set(rights_list) & set(rights)
                and not self.administrator):
            return _('No right defined for this part of the application and this user')
        return None

    def can(self, action, resource):
        return self.administrator or self.right_exists(action, resource)

    def can_access(self, url):
        """
        Whether the user may reach ``url``, either a ``"controller#action"``
        key or a mapping with ``controller`` and ``action``
        """
        if self.administrator:
            return True
        if isinstance(url, dict):
            if not url.get('controller') or not url.get('action'):
                raise ValueError(f"Invalid URL for accessibility test: {url!r}")
            key = f"{str(url['controller']).lstrip('/')}#{url['action']}"
        else:
            key = str(url)
        rights = Access.rights_of(key)
        if not rights:
            logger.debug("Unable to check access for action: %s (%r)", key, url)
            return True
        if set(rights) & {MINIMUM, PUBLIC}:
            return True
        return bool(set(rights) & set(self.resource_actions))

    def lock(self):
        self.locked = True
        self.save(update_fields=['locked'])

    def unlock(self):
        self.locked = False
        self.save(update_fields=['locked'])

    # ------------------------------------------------------------------
    # Tokens and passwords
    # ------------------------------------------------------------------

    @classmethod
    def generate_authentication_token(cls):
        while True:
            token = secrets.token_urlsafe(20)
            if not cls.objects.filter(authentication_token=token).exists():
                return token

    @classmethod
    def give_password(cls, length=8, mode='complex'):
        """Random password for generated accounts"""
        return cls.generate_password(length, mode)

    @staticmethod
    def generate_password(password_length=8, mode='normal'):
        if not password_length or password_length < 1:
            return ''
        letters = PASSWORD_LETTERS.get(mode, PASSWORD_LETTERS['complex'])
        return ''.join(secrets.choice(letters) for _i in range(password_length))


class Preference(BaseModel):
    """
    Typed value a user chose for a named setting
    """
    NATURE_STRING = 'string'
    NATURE_INTEGER = 'integer'
    NATURE_DECIMAL = 'decimal'
    NATURE_BOOLEAN = 'boolean'
    NATURE_DATE = 'date'
    NATURE_DATETIME = 'datetime'

    NATURE_CHOICES = [
        (NATURE_STRING, 'String'),
        (NATURE_INTEGER, 'Integer'),
        (NATURE_DECIMAL, 'Decimal'),
        (NATURE_BOOLEAN, 'Boolean'),
        (NATURE_DATE, 'Date'),
        (NATURE_DATETIME, 'Date and time'),
    ]

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='preferences')
    name = models.CharField(max_length=255)
    nature = models.CharField(max_length=20, choices=NATURE_CHOICES, blank=True)
    raw_value = models.TextField(null=True, blank=True)

    class Meta:
        db_table = 'preferences'
        verbose_name = 'Preference'
        verbose_name_plural = 'Preferences'
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(fields=['user', 'name'], name='unique_user_preference'),
        ]

    def __str__(self):
        return f"{self.name}={self.raw_value}"

    @classmethod
    def nature_of(cls, value):
        if isinstance(value, bool):
            return cls.NATURE_BOOLEAN
        if isinstance(value, int):
            return cls.NATURE_INTEGER
        if isinstance(value, (Decimal, float)):
            return cls.NATURE_DECIMAL
        if isinstance(value, datetime):
            return cls.NATURE_DATETIME
        if isinstance(value, date):
            return cls.NATURE_DATE
        return cls.NATURE_STRING

    @property
    def value(self):
        raw = self.raw_value
        if raw is None:
            return None
        if self.nature == self.NATURE_INTEGER:
            return int(raw)
        if self.nature == self.NATURE_DECIMAL:
            return Decimal(raw)
        if self.nature == self.NATURE_BOOLEAN:
            return raw == 'true'
        if self.nature == self.NATURE_DATE:
            return parse_date(raw)
        if self.nature == self.NATURE_DATETIME:
            return parse_datetime(raw)
        return raw

    @value.setter
    def value(self, value):
        if not self.nature and value is not None:
            self.nature = self.nature_of(value)
        if value is None:
            self.raw_value = None
        elif self.nature == self.NATURE_BOOLEAN:
            self.raw_value = 'true' if value else 'false'
        elif isinstance(value, (date, datetime)):
            self.raw_value = value.isoformat()
        else:
            self.raw_value = str(value)

    def clean(self):
        super().clean()
        if not self.nature:
            self.nature = self.NATURE_STRING
        try:
            self.value
        except (ValueError, ArithmeticError) as exc:
            raise ValidationError({'raw_value': f'Invalid {self.nature} value: {exc}'})


class Notification(BaseModel):
    """
    Message addressed to a user, optionally about a given record
    """
    LEVEL_INFORMATION = 'information'
    LEVEL_SUCCESS = 'success'
    LEVEL_WARNING = 'warning'
    LEVEL_ERROR = 'error'

    LEVEL_CHOICES = [
        (LEVEL_INFORMATION, 'Information'),
        (LEVEL_SUCCESS, 'Success'),
        (LEVEL_WARNING, 'Warning'),
        (LEVEL_ERROR, 'Error'),
    ]

    recipient = models.ForeignKey(User, on_delete=models.CASCADE, related_name='notifications')
    message = models.CharField(max_length=500)
    interpolations = models.JSONField(default=dict, blank=True)
    level = models.CharField(max_length=20, choices=LEVEL_CHOICES, default=LEVEL_INFORMATION)
    read_at = models.DateTimeField(null=True, blank=True, db_index=True)
    target_url = models.CharField(max_length=500, blank=True)

    content_type = models.ForeignKey(ContentType, on_delete=models.SET_NULL, null=True, blank=True)
    object_uuid = models.CharField(max_length=100, null=True, blank=True)
    target = GenericForeignKey('content_type', 'object_uuid')

    class Meta:
        db_table = 'notifications'
        verbose_name = 'Notification'
        verbose_name_plural = 'Notifications'
        ordering = ['-created_at']

    def __str__(self):
        return self.label

    @property
    def label(self):
        try:
            return self.message % self.interpolations if self.interpolations else self.message
        except (KeyError, TypeError, ValueError):
            return self.message

    def mark_as_read(self):
        if self.read_at is None:
            self.read_at = timezone.now()
            self.save(update_fields=['read_at'])
