from django.core.management.base import BaseCommand, CommandError

from apps.tenants.exceptions import TenantError
from apps.tenants.services import TenantService


class Command(BaseCommand):
    help = 'Rename a tenant schema'

    def add_arguments(self, parser):
        parser.add_argument('old', help='Current schema name')
        parser.add_argument('new', help='New schema name')

    def handle(self, *args, **options):
        try:
            TenantService.rename(options['old'], options['new'])
        except TenantError as e:
            raise CommandError(str(e))
        self.stdout.write(self.style.SUCCESS(f"Renamed tenant {options['old']} to {options['new']}"))
