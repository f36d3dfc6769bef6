from django.db import models
from django.core.exceptions import ValidationError

from django_tenants.models import TenantMixin, DomainMixin

from apps.core.models import TimeStampedModel
from apps.tenants.validators import validate_schema_name


class Tenant(TenantMixin, TimeStampedModel):
    """
    One farm (or organisation) with its own database schema
    """
    name = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Organization Name',
        help_text='Defaults to the schema name'
    )
    contact_email = models.EmailField(
        blank=True,
        verbose_name='Contact Email'
    )

    # Schema creation is delegated to django-tenants on first save, which
    # detects new rows by a missing pk (hence no UUID key here)
    auto_create_schema = True
    # Schemas are only dropped through TenantService.drop
    auto_drop_schema = False

    class Meta:
        db_table = 'tenants'
        verbose_name = 'Tenant'
        verbose_name_plural = 'Tenants'
        ordering = ['schema_name']

    def __str__(self):
        return f"{self.name} ({self.schema_name})"

    def clean(self):
        super().clean()
        if self.schema_name:
            try:
                validate_schema_name(self.schema_name)
            except ValidationError as exc:
                raise ValidationError({'schema_name': exc.messages})

    def save(self, *args, **kwargs):
        if not self.name:
            self.name = self.schema_name
        self.clean()
        super().save(*args, **kwargs)


class Domain(DomainMixin):
    """
    Hostname routed to a tenant
    """

    class Meta:
        db_table = 'tenant_domains'
        verbose_name = 'Domain'
        verbose_name_plural = 'Domains'

    def save(self, *args, **kwargs):
        """Ensure only one primary domain per tenant"""
        if self.is_primary:
            Domain.objects.filter(
                tenant=self.tenant,
                is_primary=True
            ).exclude(pk=self.pk).update(is_primary=False)

        super().save(*args, **kwargs)
