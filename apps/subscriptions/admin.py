from django.contrib import admin

from .models import Subscription, SubscriptionNature


@admin.register(SubscriptionNature)
class SubscriptionNatureAdmin(admin.ModelAdmin):
    list_display = ('name', 'nature', 'actual_number')
    list_filter = ('nature',)
    search_fields = ('name',)


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    list_display = ('number', 'nature', 'subscriber_name', 'start', 'finish', 'suspended')
    list_filter = ('nature', 'suspended')
    search_fields = ('number', 'subscriber__last_name', 'address__mail_line_1')
    readonly_fields = ('number', 'created_at', 'updated_at')
    raw_id_fields = ('subscriber', 'address', 'sale', 'sale_item')
