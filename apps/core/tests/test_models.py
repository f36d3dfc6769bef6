import logging

from django.test import TestCase

from apps.core.logging import TenantContextFilter
from apps.core.utils import user_context, get_current_user
from apps.entities.models import Entity
from apps.products.models import Product, ProductGroup
from apps.users.models import User


class AuditStampTests(TestCase):
    def setUp(self):
        self.admin = User.objects.create_superuser(
            email='admin@example.org', password='secret', first_name='Ada', last_name='Admin'
        )

    def test_rows_record_acting_user(self):
        with user_context(self.admin):
            entity = Entity(last_name='Dupont')
            entity.save()
        self.assertEqual(entity.created_by, self.admin)
        self.assertEqual(entity.updated_by, self.admin)
        self.assertIsNone(get_current_user())

    def test_rows_without_acting_user(self):
        entity = Entity(last_name='Dupont')
        entity.save()
        self.assertIsNone(entity.created_by)

    def test_bulk_update_records_acting_user(self):
        entity = Entity(last_name='Dupont')
        entity.save()
        with user_context(self.admin):
            Entity.objects.filter(pk=entity.pk).update(active=False)
        entity.refresh_from_db()
        self.assertFalse(entity.active)
        self.assertEqual(entity.updated_by, self.admin)


class NumberedModelTests(TestCase):
    def test_sequential_numbers(self):
        first = Product(name='Marguerite')
        first.save()
        second = Product(name='Blanchette')
        second.save()
        self.assertEqual(first.number, 'P00001')
        self.assertEqual(second.number, 'P00002')

    def test_numbers_shared_with_groups(self):
        Product(name='Marguerite').save()
        group = ProductGroup(name='Herd')
        group.save()
        self.assertEqual(group.number, 'P00002')

    def test_given_number_is_kept(self):
        product = Product(name='Marguerite', number='P00042')
        product.save()
        following = Product(name='Blanchette')
        following.save()
        self.assertEqual(product.number, 'P00042')
        self.assertEqual(following.number, 'P00043')

    def test_numbers_grow_past_width(self):
        Product(name='Marguerite', number='P99999').save()
        first = Product(name='Blanchette')
        first.save()
        second = Product(name='Roussette')
        second.save()
        self.assertEqual(first.number, 'P100000')
        self.assertEqual(second.number, 'P100001')


class TenantContextFilterTests(TestCase):
    def test_adds_schema_to_record(self):
        record = logging.LogRecord('apps', logging.INFO, __file__, 1, 'message', None, None)
        self.assertTrue(TenantContextFilter().filter(record))
        self.assertEqual(record.tenant, 'public')
