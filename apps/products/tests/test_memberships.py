from datetime import timedelta

from django.core.exceptions import ValidationError
from django.test import TestCase
from django.utils import timezone

from apps.products.models import Product, ProductGroup, ProductMembership


class ProductMembershipTests(TestCase):
    def setUp(self):
        self.now = timezone.now().replace(microsecond=0)
        self.herd = ProductGroup(name='Dairy herd', variety='animal_group')
        self.herd.save()
        self.cow = Product(name='Marguerite', variety='bos_taurus')
        self.cow.save()

    def days(self, count):
        return self.now + timedelta(days=count)

    def test_add_and_members_at(self):
        self.herd.add(self.cow, started_at=self.days(-10))

        self.assertEqual(list(self.herd.members_at(self.days(-5))), [self.cow])
        self.assertEqual(list(self.herd.members_at(self.days(-11))), [])
        self.assertEqual(list(self.cow.groups_at(self.days(-5))), [self.herd])

    def test_add_defaults_to_now(self):
        membership = self.herd.add(self.cow)
        self.assertIsNotNone(membership.started_at)
        self.assertIn(self.cow, self.herd.members_at())

    def test_remove_closes_open_membership(self):
        self.herd.add(self.cow, started_at=self.days(-10))
        membership = self.herd.remove(self.cow, stopped_at=self.days(-2))

        self.assertEqual(ProductMembership.objects.count(), 1)
        self.assertEqual(membership.stopped_at, self.days(-2))
        self.assertEqual(list(self.herd.members_at(self.days(-5))), [self.cow])
        self.assertEqual(list(self.herd.members_at(self.days(-1))), [])

    def test_remove_closes_earliest_membership(self):
        first = self.herd.add(self.cow, started_at=self.days(-20))
        second = self.herd.add(self.cow, started_at=self.days(-10))

        self.herd.remove(self.cow, stopped_at=self.days(-5))

        first.refresh_from_db()
        second.refresh_from_db()
        self.assertEqual(first.stopped_at, self.days(-5))
        self.assertIsNone(second.stopped_at)

    def test_remove_without_membership(self):
        membership = self.herd.remove(self.cow, stopped_at=self.days(-1))
        self.assertIsNone(membership.started_at)
        self.assertEqual(membership.stopped_at, self.days(-1))
        self.assertEqual(list(self.herd.members_at(self.days(-3))), [self.cow])

    def test_open_bounds(self):
        ProductMembership(group=self.herd, member=self.cow).save()
        self.assertEqual(list(self.herd.members_at(self.days(-1000))), [self.cow])
        self.assertEqual(list(self.herd.members_at(self.days(1000))), [self.cow])

    def test_add_rejects_non_products(self):
        with self.assertRaises(TypeError):
            self.herd.add('Marguerite')
        with self.assertRaises(TypeError):
            self.herd.remove(None)

    def test_invalid_bounds(self):
        membership = ProductMembership(
            group=self.herd, member=self.cow, started_at=self.days(0), stopped_at=self.days(-1)
        )
        with self.assertRaises(ValidationError):
            membership.save()

    def test_group_cannot_contain_itself(self):
        with self.assertRaises(ValidationError):
            self.herd.add(self.herd)


class ProductGroupTests(TestCase):
    def test_default_variety(self):
        group = ProductGroup(name='Parcels')
        group.save()
        self.assertEqual(group.variety, 'product_group')

    def test_unknown_variety(self):
        with self.assertRaises(ValidationError):
            ProductGroup(name='Herd', variety='bos_taurus').save()

    def test_unique_name(self):
        ProductGroup(name='Herd').save()
        with self.assertRaises(ValidationError):
            ProductGroup(name='Herd').save()

    def test_product_cannot_die_before_birth(self):
        now = timezone.now()
        product = Product(name='Marguerite', born_at=now, dead_at=now - timedelta(days=1))
        with self.assertRaises(ValidationError):
            product.save()
