from datetime import date
from decimal import Decimal
from unittest import mock

from django.core.exceptions import ValidationError
from django.test import TestCase

from apps.entities.models import Entity, EntityAddress
from apps.products.models import ProductNature
from apps.sales.models import Sale, SaleItem
from apps.subscriptions.models import Subscription, SubscriptionNature

TODAY = date(2024, 3, 15)


class SubscriptionTestCase(TestCase):
    def setUp(self):
        patcher = mock.patch('apps.subscriptions.models.timezone.localdate', return_value=TODAY)
        patcher.start()
        self.addCleanup(patcher.stop)

        self.period_nature = SubscriptionNature(name='Yearly journal')
        self.period_nature.save()
        self.quantity_nature = SubscriptionNature(
            name='Weekly issues', nature=SubscriptionNature.NATURE_QUANTITY, actual_number=120
        )
        self.quantity_nature.save()

        self.client_entity = Entity(first_name='Jeanne', last_name='Martin')
        self.client_entity.save()
        self.address = EntityAddress(entity=self.client_entity, mail_line_4='12 rue des Lilas')
        self.address.save()


class PeriodSubscriptionTests(SubscriptionTestCase):

    def test_default_period(self):
        subscription = Subscription(nature=self.period_nature, subscriber=self.client_entity)
        subscription.save()

        self.assertEqual(subscription.started_on, TODAY)
        self.assertEqual(subscription.stopped_on, date(2025, 3, 14))
        self.assertEqual(subscription.number, 'SUB00001')
        self.assertTrue(subscription.is_active())
        self.assertTrue(subscription.is_active(date(2025, 3, 14)))
        self.assertFalse(subscription.is_active(date(2025, 3, 15)))

    def test_product_nature_period(self):
        product_nature = ProductNature(
            name='Half year journal',
            subscribing=True,
            subscription_nature=self.period_nature,
            subscription_period='6 months',
        )
        product_nature.save()

        subscription = Subscription(
            product_nature=product_nature,
            address=self.address,
            started_on=date(2024, 1, 1),
        )
        subscription.save()

        self.assertEqual(subscription.nature, self.period_nature)
        self.assertEqual(subscription.subscriber, self.client_entity)
        self.assertEqual(subscription.stopped_on, date(2024, 6, 30))
        self.assertEqual(subscription.subscriber_name, 'Jeanne Martin')

    def test_stop_before_start(self):
        subscription = Subscription(
            nature=self.period_nature,
            subscriber=self.client_entity,
            started_on=date(2024, 5, 1),
            stopped_on=date(2024, 4, 1),
        )
        with self.assertRaises(ValidationError) as context:
            subscription.save()
        self.assertIn('stopped_on', context.exception.message_dict)

    def test_bounds_are_kept_on_update(self):
        subscription = Subscription(nature=self.period_nature, subscriber=self.client_entity)
        subscription.save()
        subscription.stopped_on = None
        with self.assertRaises(ValidationError):
            subscription.save()

    def test_required_fields(self):
        with self.assertRaises(ValidationError) as context:
            Subscription().save()
        self.assertIn('nature', context.exception.message_dict)
        self.assertIn('subscriber', context.exception.message_dict)

    def test_address_must_be_a_mail_address(self):
        email = EntityAddress(
            entity=self.client_entity, canal=EntityAddress.CANAL_EMAIL, coordinate='jeanne@example.org'
        )
        email.save()
        with self.assertRaises(ValidationError) as context:
            Subscription(nature=self.period_nature, address=email).save()
        self.assertIn('address', context.exception.message_dict)

    def test_subscriber_follows_address(self):
        other = Entity(last_name='Durand')
        other.save()
        subscription = Subscription(nature=self.period_nature, subscriber=other, address=self.address)
        subscription.save()
        self.assertEqual(subscription.subscriber, self.client_entity)

    def test_display(self):
        subscription = Subscription(
            nature=self.period_nature,
            subscriber=self.client_entity,
            started_on=date(2024, 1, 1),
            stopped_on=date(2024, 12, 31),
        )
        subscription.save()
        self.assertTrue(subscription.start)
        self.assertTrue(subscription.finish)
        self.assertEqual(subscription.subscriber_name, 'Jeanne Martin')


class QuantitySubscriptionTests(SubscriptionTestCase):

    def test_default_range(self):
        subscription = Subscription(nature=self.quantity_nature, subscriber=self.client_entity)
        subscription.save()

        self.assertEqual(subscription.first_number, 120)
        self.assertEqual(subscription.last_number, 120)
        self.assertEqual(subscription.start, 120)
        self.assertEqual(subscription.finish, 120)
        self.assertTrue(subscription.is_active())
        self.assertFalse(subscription.is_active(121))

    def test_product_nature_quantity(self):
        product_nature = ProductNature(
            name='Ten issues',
            subscribing=True,
            subscription_nature=self.quantity_nature,
            subscription_quantity=10,
        )
        product_nature.save()

        subscription = Subscription(product_nature=product_nature, subscriber=self.client_entity)
        subscription.save()

        self.assertEqual((subscription.first_number, subscription.last_number), (120, 129))
        self.assertTrue(subscription.is_active(129))
        self.assertFalse(subscription.is_active(119))

    def test_last_before_first(self):
        subscription = Subscription(
            nature=self.quantity_nature,
            subscriber=self.client_entity,
            first_number=10,
            last_number=5,
        )
        with self.assertRaises(ValidationError) as context:
            subscription.save()
        self.assertIn('last_number', context.exception.message_dict)


class SaleSubscriptionTests(SubscriptionTestCase):

    def setUp(self):
        super().setUp()
        self.product_nature = ProductNature(
            name='Yearly journal subscription',
            subscribing=True,
            subscription_nature=self.period_nature,
        )
        self.product_nature.save()
        self.sale = Sale(client=self.client_entity, delivery_address=self.address)
        self.sale.save()

    def test_subscribe_from_sale_item(self):
        item = SaleItem(sale=self.sale, product_nature=self.product_nature, quantity=Decimal('2'))
        item.save()

        subscription = item.subscribe()

        self.assertEqual(subscription.sale, self.sale)
        self.assertEqual(subscription.address, self.address)
        self.assertEqual(subscription.subscriber, self.client_entity)
        self.assertEqual(subscription.nature, self.period_nature)
        self.assertEqual(subscription.quantity, Decimal('2'))
        self.assertEqual(subscription.stopped_on, date(2025, 3, 14))

    def test_non_subscribing_item(self):
        nature = ProductNature(name='Hay bale')
        nature.save()
        item = SaleItem(sale=self.sale, product_nature=nature)
        item.save()
        self.assertIsNone(item.subscribe())

    def test_sale_requires_item(self):
        subscription = Subscription(sale=self.sale, nature=self.period_nature)
        with self.assertRaises(ValidationError) as context:
            subscription.save()
        self.assertIn('sale_item', context.exception.message_dict)

    def test_subscribing_nature_needs_subscription_nature(self):
        with self.assertRaises(ValidationError):
            ProductNature(name='Broken', subscribing=True).save()

    def test_invalid_subscription_period(self):
        with self.assertRaises(ValidationError):
            ProductNature(
                name='Broken', subscribing=True,
                subscription_nature=self.period_nature, subscription_period='forever',
            ).save()
