import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('subscriptions', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='ProductNature',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, unique=True, verbose_name='Universal ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='Creation Timestamp')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Last Modification Timestamp')),
                ('created_by', models.ForeignKey(blank=True, editable=False, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='products_productnature_created', to=settings.AUTH_USER_MODEL, verbose_name='Created By')),
                ('updated_by', models.ForeignKey(blank=True, editable=False, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='products_productnature_updated', to=settings.AUTH_USER_MODEL, verbose_name='Last Modified By')),
                ('name', models.CharField(max_length=255, unique=True)),
                ('variety', models.CharField(default='product', max_length=120)),
                ('active', models.BooleanField(default=True)),
                ('subscribing', models.BooleanField(default=False, help_text='Selling this nature opens a subscription')),
                ('subscription_period', models.CharField(blank=True, help_text='Delay expression such as "1 year" or "6 months"', max_length=255)),
                ('subscription_quantity', models.PositiveIntegerField(blank=True, help_text='Number of issues covered by one subscription', null=True)),
                ('subscription_nature', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='product_natures', to='subscriptions.subscriptionnature')),
            ],
            options={
                'verbose_name': 'Product Nature',
                'verbose_name_plural': 'Product Natures',
                'db_table': 'product_natures',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, unique=True, verbose_name='Universal ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='Creation Timestamp')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Last Modification Timestamp')),
                ('created_by', models.ForeignKey(blank=True, editable=False, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='products_product_created', to=settings.AUTH_USER_MODEL, verbose_name='Created By')),
                ('updated_by', models.ForeignKey(blank=True, editable=False, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='products_product_updated', to=settings.AUTH_USER_MODEL, verbose_name='Last Modified By')),
                ('number', models.CharField(blank=True, db_index=True, max_length=60, unique=True)),
                ('name', models.CharField(max_length=255)),
                ('variety', models.CharField(default='product', max_length=120)),
                ('work_number', models.CharField(blank=True, max_length=255)),
                ('identification_number', models.CharField(blank=True, max_length=255)),
                ('born_at', models.DateTimeField(blank=True, null=True)),
                ('dead_at', models.DateTimeField(blank=True, null=True)),
                ('description', models.TextField(blank=True)),
                ('nature', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='products', to='products.productnature')),
            ],
            options={
                'verbose_name': 'Product',
                'verbose_name_plural': 'Products',
                'db_table': 'products',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='ProductGroup',
            fields=[
                ('product_ptr', models.OneToOneField(auto_created=True, on_delete=django.db.models.deletion.CASCADE, parent_link=True, primary_key=True, serialize=False, to='products.product')),
                ('parent', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='children', to='products.productgroup')),
            ],
            options={
                'verbose_name': 'Product Group',
                'verbose_name_plural': 'Product Groups',
                'db_table': 'product_groups',
                'ordering': ['name'],
            },
            bases=('products.product',),
        ),
        migrations.CreateModel(
            name='ProductMembership',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, unique=True, verbose_name='Universal ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='Creation Timestamp')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Last Modification Timestamp')),
                ('created_by', models.ForeignKey(blank=True, editable=False, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='products_productmembership_created', to=settings.AUTH_USER_MODEL, verbose_name='Created By')),
                ('updated_by', models.ForeignKey(blank=True, editable=False, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='products_productmembership_updated', to=settings.AUTH_USER_MODEL, verbose_name='Last Modified By')),
                ('started_at', models.DateTimeField(blank=True, db_index=True, null=True)),
                ('stopped_at', models.DateTimeField(blank=True, db_index=True, null=True)),
                ('member', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='group_memberships', to='products.product')),
                ('group', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='memberships', to='products.productgroup')),
            ],
            options={
                'verbose_name': 'Product Membership',
                'verbose_name_plural': 'Product Memberships',
                'db_table': 'product_memberships',
                'ordering': ['started_at'],
                'indexes': [models.Index(fields=['group', 'member'], name='product_membership_group_idx')],
            },
        ),
    ]
