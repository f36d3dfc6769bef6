from django.core.management.base import BaseCommand, CommandError

from apps.tenants.exceptions import TenantError
from apps.tenants.services import TenantService


class Command(BaseCommand):
    help = 'Drop a tenant schema, its private files and its registration'

    def add_arguments(self, parser):
        parser.add_argument('name', help='Schema name of the tenant to drop')
        parser.add_argument(
            '--noinput', '--no-input',
            action='store_false',
            dest='interactive',
            help='Do not ask for confirmation',
        )

    def handle(self, *args, **options):
        name = options['name']
        if options['interactive']:
            answer = input(f"Tenant {name} and all its data will be destroyed. Type 'yes' to continue: ")
            if answer != 'yes':
                self.stdout.write(self.style.WARNING('Cancelled.'))
                return
        try:
            TenantService.drop(name)
        except TenantError as e:
            raise CommandError(str(e))
        self.stdout.write(self.style.SUCCESS(f"Dropped tenant: {name}"))
