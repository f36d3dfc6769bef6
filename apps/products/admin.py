from django.contrib import admin

from .models import Product, ProductGroup, ProductMembership, ProductNature


class MembershipInline(admin.TabularInline):
    model = ProductMembership
    fk_name = 'group'
    extra = 0
    fields = ('member', 'started_at', 'stopped_at')


@admin.register(ProductNature)
class ProductNatureAdmin(admin.ModelAdmin):
    list_display = ('name', 'variety', 'subscribing', 'subscription_nature', 'active')
    list_filter = ('active', 'subscribing')
    search_fields = ('name', 'variety')


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('number', 'name', 'variety', 'nature', 'born_at', 'dead_at')
    list_filter = ('variety', 'nature')
    search_fields = ('number', 'name', 'work_number', 'identification_number')
    readonly_fields = ('number', 'created_at', 'updated_at')


@admin.register(ProductGroup)
class ProductGroupAdmin(admin.ModelAdmin):
    list_display = ('number', 'name', 'variety', 'parent')
    list_filter = ('variety',)
    search_fields = ('number', 'name')
    readonly_fields = ('number', 'created_at', 'updated_at')
    inlines = [MembershipInline]
