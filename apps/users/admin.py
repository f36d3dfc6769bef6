# apps/users/admin.py
from django.contrib import admin, messages
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from .models import Notification, Preference, Role, User


class PreferenceInline(admin.TabularInline):
    model = Preference
    extra = 0
    fields = ('name', 'nature', 'raw_value')


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin configuration for User model"""

    list_display = (
        'email',
        'first_name',
        'last_name',
        'role',
        'administrator',
        'employed',
        'locked',
        'last_login',
    )

    list_filter = (
        'administrator',
        'employed',
        'commercial',
        'locked',
        'role',
        'created_at',
    )

    search_fields = (
        'email',
        'first_name',
        'last_name',
        'employment',
    )

    ordering = ('last_name', 'first_name')

    readonly_fields = (
        'last_login',
        'date_joined',
        'created_at',
        'updated_at',
        'authentication_token',
    )

    fieldsets = (
        (_('Personal Info'), {
            'fields': (
                'email',
                'password',
                'first_name',
                'last_name',
                'language',
                'person',
                'description',
            )
        }),
        (_('Employment'), {
            'fields': (
                'employed',
                'employment',
                'commercial',
                'maximal_grantable_reduction_percentage',
            )
        }),
        (_('Rights'), {
            'fields': (
                'administrator',
                'role',
                'rights',
                'locked',
                'is_active',
                'is_staff',
                'is_superuser',
            )
        }),
        (_('Important Dates'), {
            'fields': (
                'last_login',
                'date_joined',
                'created_at',
                'updated_at',
                'authentication_token',
            )
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': (
                'email',
                'password1',
                'password2',
                'first_name',
                'last_name',
                'role',
                'administrator',
            ),
        }),
    )

    inlines = [PreferenceInline]

    actions = ['lock_users', 'unlock_users']

    def get_readonly_fields(self, request, obj=None):
        readonly_fields = list(super().get_readonly_fields(request, obj))
        # The person of a user is set once
        if obj and obj.person_id:
            readonly_fields.append('person')
        return tuple(readonly_fields)

    @admin.action(description=_('Lock selected users'))
    def lock_users(self, request, queryset):
        count = queryset.exclude(pk=request.user.pk).update(locked=True)
        self.message_user(request, _('Locked %(count)d user(s).') % {'count': count}, messages.SUCCESS)

    @admin.action(description=_('Unlock selected users'))
    def unlock_users(self, request, queryset):
        count = queryset.update(locked=False)
        self.message_user(request, _('Unlocked %(count)d user(s).') % {'count': count}, messages.SUCCESS)


@admin.register(Role)
class RoleAdmin(admin.ModelAdmin):
    list_display = ('name', 'reference_name', 'created_at')
    search_fields = ('name', 'reference_name')
    readonly_fields = ('created_at', 'updated_at')


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ('recipient', 'label', 'level', 'read_at', 'created_at')
    list_filter = ('level', 'read_at')
    search_fields = ('message', 'recipient__email')
