from django.core.management.base import BaseCommand, CommandError

from apps.tenants.exceptions import TenantError
from apps.tenants.services import TenantService


class Command(BaseCommand):
    help = 'Migrate one tenant schema (or every registered tenant with --all)'

    def add_arguments(self, parser):
        parser.add_argument('name', nargs='?', help='Schema name of the tenant')
        parser.add_argument('--all', action='store_true', help='Migrate every registered tenant')
        parser.add_argument('--app', dest='app_label', help='Restrict to one application')
        target = parser.add_mutually_exclusive_group()
        target.add_argument('--to', help='Migrate up to this migration ([app_label.]name)')
        target.add_argument('--down-to', dest='down_to', help='Migrate down to this migration ([app_label.]name)')

    def handle(self, *args, **options):
        if options['all']:
            names = TenantService.list()
        elif options['name']:
            names = [options['name']]
        else:
            raise CommandError('Give a tenant name or --all')

        for name in names:
            self.stdout.write(f"Migrating {name}...")
            try:
                TenantService.migrate(
                    name,
                    to=options.get('to'),
                    down_to=options.get('down_to'),
                    app_label=options.get('app_label'),
                    verbosity=options['verbosity'],
                )
            except TenantError as e:
                raise CommandError(str(e))
            self.stdout.write(self.style.SUCCESS(f"   {name} migrated"))
