from django.core.management.base import BaseCommand
from django.conf import settings

from apps.tenants.models import Domain
from apps.tenants.services import TenantService


class Command(BaseCommand):
    help = 'List the tenants registered for the current environment'

    def add_arguments(self, parser):
        parser.add_argument(
            '--check',
            action='store_true',
            help='Forget tenants whose schema no longer exists',
        )

    def handle(self, *args, **options):
        if options['check']:
            for name in TenantService.list():
                TenantService.check(name)

        names = TenantService.list()
        self.stdout.write("=" * 60)
        self.stdout.write(f"TENANTS ({settings.ERP_ENV})")
        self.stdout.write("=" * 60)
        self.stdout.write(f"Total Tenants: {len(names)}")
        self.stdout.write("-" * 60)
        self.stdout.write(f"{'Schema':<30} | {'Domain':<25}")
        self.stdout.write("-" * 60)
        for name in names:
            domain = Domain.objects.filter(tenant__schema_name=name, is_primary=True).first()
            domain_name = domain.domain if domain else "No Domain"
            self.stdout.write(f"{name:<30} | {domain_name:<25}")
        self.stdout.write("-" * 60)
