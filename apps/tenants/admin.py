from django.contrib import admin
from django_tenants.admin import TenantAdminMixin
from .models import Tenant, Domain


class DomainInline(admin.TabularInline):
    model = Domain
    extra = 0


@admin.register(Tenant)
class TenantAdmin(TenantAdminMixin, admin.ModelAdmin):
    list_display = ('schema_name', 'name', 'contact_email', 'created_at')
    search_fields = ('name', 'schema_name', 'contact_email')
    readonly_fields = ('created_at', 'updated_at')
    inlines = [DomainInline]

    def get_readonly_fields(self, request, obj=None):
        # Renaming goes through the rename_tenant command
        if obj:
            return self.readonly_fields + ('schema_name',)
        return self.readonly_fields


@admin.register(Domain)
class DomainAdmin(admin.ModelAdmin):
    list_display = ('domain', 'tenant', 'is_primary')
    list_filter = ('is_primary',)
    search_fields = ('domain', 'tenant__name')
