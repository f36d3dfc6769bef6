from contextlib import nullcontext
from io import StringIO
from unittest import mock

from django.core.management import call_command
from django.test import TestCase

from apps.products.models import Product, ProductGroup
from apps.sales.models import Sale
from apps.subscriptions.models import Subscription
from apps.tenants.services import TenantService


class LoadFarmDummyCommandTests(TestCase):
    def test_load(self):
        out = StringIO()
        with mock.patch.object(TenantService, 'exists', return_value=True), \
                mock.patch.object(TenantService, 'switch', side_effect=lambda name: nullcontext(name)):
            call_command('load_farm_dummy', 'farm', count=6, clients=3, seed=42, stdout=out)

        self.assertEqual(ProductGroup.objects.count(), 3)
        self.assertEqual(Product.objects.exclude(pk__in=ProductGroup.objects.values('pk')).count(), 6)
        self.assertEqual(Sale.objects.count(), 3)
        self.assertEqual(Subscription.objects.count(), 3)
        self.assertIn('Created 6 animals in 3 herds', out.getvalue())
