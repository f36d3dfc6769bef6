from django.contrib import admin

from .models import Entity, EntityAddress


class EntityAddressInline(admin.TabularInline):
    model = EntityAddress
    extra = 0
    fields = ('canal', 'coordinate', 'mail_line_1', 'by_default')


@admin.register(Entity)
class EntityAdmin(admin.ModelAdmin):
    list_display = ('last_name', 'first_name', 'nature', 'active')
    list_filter = ('nature', 'active')
    search_fields = ('first_name', 'last_name')
    inlines = [EntityAddressInline]
