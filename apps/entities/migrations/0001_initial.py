import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Entity',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, unique=True, verbose_name='Universal ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='Creation Timestamp')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Last Modification Timestamp')),
                ('created_by', models.ForeignKey(blank=True, editable=False, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='entities_entity_created', to=settings.AUTH_USER_MODEL, verbose_name='Created By')),
                ('updated_by', models.ForeignKey(blank=True, editable=False, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='entities_entity_updated', to=settings.AUTH_USER_MODEL, verbose_name='Last Modified By')),
                ('nature', models.CharField(choices=[('contact', 'Contact'), ('organization', 'Organization')], db_index=True, default='contact', max_length=20)),
                ('first_name', models.CharField(blank=True, max_length=255)),
                ('last_name', models.CharField(max_length=255)),
                ('active', models.BooleanField(default=True)),
                ('description', models.TextField(blank=True)),
            ],
            options={
                'verbose_name': 'Entity',
                'verbose_name_plural': 'Entities',
                'db_table': 'entities',
                'ordering': ['last_name', 'first_name'],
            },
        ),
        migrations.CreateModel(
            name='EntityAddress',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, unique=True, verbose_name='Universal ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='Creation Timestamp')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Last Modification Timestamp')),
                ('created_by', models.ForeignKey(blank=True, editable=False, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='entities_entityaddress_created', to=settings.AUTH_USER_MODEL, verbose_name='Created By')),
                ('updated_by', models.ForeignKey(blank=True, editable=False, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='entities_entityaddress_updated', to=settings.AUTH_USER_MODEL, verbose_name='Last Modified By')),
                ('canal', models.CharField(choices=[('mail', 'Mail'), ('email', 'Email'), ('phone', 'Phone'), ('mobile', 'Mobile'), ('website', 'Website')], default='mail', max_length=20)),
                ('coordinate', models.CharField(blank=True, max_length=500)),
                ('by_default', models.BooleanField(default=False)),
                ('mail_line_1', models.CharField(blank=True, max_length=255)),
                ('mail_line_2', models.CharField(blank=True, max_length=255)),
                ('mail_line_3', models.CharField(blank=True, max_length=255)),
                ('mail_line_4', models.CharField(blank=True, max_length=255)),
                ('mail_line_5', models.CharField(blank=True, max_length=255)),
                ('mail_line_6', models.CharField(blank=True, max_length=255)),
                ('mail_country', models.CharField(blank=True, max_length=2)),
                ('entity', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='addresses', to='entities.entity')),
            ],
            options={
                'verbose_name': 'Entity Address',
                'verbose_name_plural': 'Entity Addresses',
                'db_table': 'entity_addresses',
                'ordering': ['-by_default', 'created_at'],
            },
        ),
    ]
