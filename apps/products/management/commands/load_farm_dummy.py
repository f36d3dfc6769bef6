import random
from datetime import timedelta
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone
from faker import Faker

from apps.entities.models import Entity, EntityAddress
from apps.products.models import Product, ProductGroup, ProductNature
from apps.sales.models import Sale, SaleItem
from apps.subscriptions.models import SubscriptionNature
from apps.tenants.services import TenantService

ANIMAL_VARIETIES = ['bos_taurus', 'ovis_aries', 'capra_hircus']


class Command(BaseCommand):
    help = 'Generates dummy farm data (herds, clients, subscribing sales) for a tenant'

    def add_arguments(self, parser):
        parser.add_argument('tenant', help='Name of the tenant')
        parser.add_argument('--count', type=int, default=30, help='Number of animals to create')
        parser.add_argument('--clients', type=int, default=10, help='Number of clients to create')
        parser.add_argument('--seed', type=int, help='Seed for reproducible data')

    def handle(self, *args, **options):
        name = options['tenant']
        if not TenantService.exists(name):
            raise CommandError(f"Unexistent tenant: {name}")

        fake = Faker('fr_FR')
        if options['seed'] is not None:
            Faker.seed(options['seed'])
            random.seed(options['seed'])

        self.stdout.write(f'Creating farm dummy data for tenant: {name}...')
        with TenantService.switch(name):
            with transaction.atomic():
                herds = self.create_herds(fake, options['count'])
                clients = self.create_clients(fake, options['clients'])
                sales = self.create_sales(clients)

        self.stdout.write(self.style.SUCCESS(
            f'Created {sum(len(members) for members in herds.values())} animals in {len(herds)} herds, '
            f'{len(clients)} clients and {len(sales)} subscribing sales'
        ))

    def create_herds(self, fake, count):
        herds = {}
        for variety in ANIMAL_VARIETIES:
            group = ProductGroup.objects.filter(name=f'Herd {variety}').first()
            if group is None:
                group = ProductGroup(name=f'Herd {variety}', variety='animal_group')
                group.save()
            herds[group] = []

        groups = list(herds)
        now = timezone.now()
        for _i in range(count):
            born_at = now - timedelta(days=random.randint(30, 2000))
            animal = Product(
                name=fake.first_name(),
                variety=random.choice(ANIMAL_VARIETIES),
                identification_number=fake.bothify('FR##########'),
                work_number=fake.numerify('####'),
                born_at=born_at,
            )
            animal.save()
            group = random.choice(groups)
            group.add(animal, started_at=born_at + timedelta(days=random.randint(0, 29)))
            herds[group].append(animal)

        self.stdout.write(self.style.SUCCESS(f'Created {count} animals'))
        return herds

    def create_clients(self, fake, count):
        clients = []
        for _i in range(count):
            try:
                client = Entity(first_name=fake.first_name(), last_name=fake.last_name())
                client.save()
                address = EntityAddress(
                    entity=client,
                    canal=EntityAddress.CANAL_MAIL,
                    mail_line_4=fake.street_address(),
                    mail_line_6=f'{fake.postcode()} {fake.city()}',
                    mail_country='fr',
                    by_default=True,
                )
                address.save()
                clients.append((client, address))
            except ValidationError as e:
                self.stdout.write(self.style.WARNING(f'Failed to create client: {e.message_dict}'))
        return clients

    def create_sales(self, clients):
        nature, _created = SubscriptionNature.objects.get_or_create(
            name='Farm journal',
            defaults={'nature': SubscriptionNature.NATURE_PERIOD},
        )
        product_nature = ProductNature.objects.filter(name='Farm journal subscription').first()
        if product_nature is None:
            product_nature = ProductNature(
                name='Farm journal subscription',
                variety='service',
                subscribing=True,
                subscription_nature=nature,
                subscription_period='1 year',
            )
            product_nature.save()

        sales = []
        for client, address in clients:
            sale = Sale(client=client, delivery_address=address, state=Sale.STATE_ORDER)
            sale.save()
            item = SaleItem(sale=sale, product_nature=product_nature, unit_pretax_amount=Decimal('45.00'))
            item.save()
            item.subscribe()
            sales.append(sale)
        return sales
