from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase

from apps.entities.models import Entity, EntityAddress
from apps.products.models import ProductNature
from apps.sales.models import Sale, SaleItem


class SaleTests(TestCase):
    def setUp(self):
        self.client_entity = Entity(last_name='Martin')
        self.client_entity.save()
        self.nature = ProductNature(name='Hay bale')
        self.nature.save()

    def test_number_and_amount(self):
        sale = Sale(client=self.client_entity)
        sale.save()
        SaleItem(sale=sale, product_nature=self.nature, quantity=Decimal('3'), unit_pretax_amount=Decimal('4.5')).save()
        SaleItem(sale=sale, product_nature=self.nature, unit_pretax_amount=Decimal('10')).save()

        self.assertEqual(sale.number, 'S00001')
        self.assertEqual(sale.amount, Decimal('23.5'))

    def test_delivery_address_of_another_entity(self):
        other = Entity(last_name='Durand')
        other.save()
        address = EntityAddress(entity=other, mail_line_4='1 place du Marché')
        address.save()
        with self.assertRaises(ValidationError):
            Sale(client=self.client_entity, delivery_address=address).save()
