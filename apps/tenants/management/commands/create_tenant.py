from django.core.management.base import BaseCommand, CommandError

from apps.tenants.exceptions import TenantError
from apps.tenants.services import TenantService


class Command(BaseCommand):
    help = 'Create a tenant schema and register it for the current environment'

    def add_arguments(self, parser):
        parser.add_argument('name', help='Schema name of the new tenant')
        parser.add_argument('--domain', help='Primary domain routed to the tenant')

    def handle(self, *args, **options):
        name = options['name']
        self.stdout.write(f"Creating tenant: {name}")
        try:
            TenantService.create(name, domain=options.get('domain'))
        except TenantError as e:
            raise CommandError(str(e))
        self.stdout.write(self.style.SUCCESS(f"Created tenant: {name}"))
