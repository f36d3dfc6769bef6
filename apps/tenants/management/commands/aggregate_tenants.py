from django.core.management.base import BaseCommand, CommandError

from apps.tenants.exceptions import TenantError
from apps.tenants.services import TenantService


class Command(BaseCommand):
    help = 'Build (or drop) the schema of views aggregating every tenant'

    def add_arguments(self, parser):
        parser.add_argument('--drop', action='store_true', help='Drop the aggregation schema')

    def handle(self, *args, **options):
        if options['drop']:
            TenantService.drop_aggregation_schema()
            self.stdout.write(self.style.SUCCESS(f"Dropped schema {TenantService.AGGREGATION_NAME}"))
            return
        try:
            TenantService.create_aggregation_schema()
        except TenantError as e:
            raise CommandError(str(e))
        self.stdout.write(self.style.SUCCESS(
            f"Built schema {TenantService.AGGREGATION_NAME} over {len(TenantService.list())} tenant(s)"
        ))
