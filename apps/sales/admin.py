from django.contrib import admin

from .models import Sale, SaleItem


class SaleItemInline(admin.TabularInline):
    model = SaleItem
    extra = 0
    fields = ('product_nature', 'quantity', 'unit_pretax_amount')


@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    list_display = ('number', 'client', 'state', 'invoiced_at', 'created_at')
    list_filter = ('state',)
    search_fields = ('number', 'client__last_name', 'client__first_name')
    readonly_fields = ('number', 'created_at', 'updated_at')
    inlines = [SaleItemInline]
