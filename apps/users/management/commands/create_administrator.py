from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError

from apps.tenants.exceptions import TenantError
from apps.tenants.services import TenantService
from apps.users.models import User


class Command(BaseCommand):
    help = 'Create (or reset the password of) an administrator in a tenant'

    def add_arguments(self, parser):
        parser.add_argument('tenant', help='Name of the tenant')
        parser.add_argument('--email', required=True, help='Email of the administrator')
        parser.add_argument('--password', help='Password, generated when omitted')
        parser.add_argument('--first-name', default='Admin', help='First name')
        parser.add_argument('--last-name', default='Istrator', help='Last name')

    def handle(self, *args, **options):
        name = options['tenant']
        email = options['email'].strip().lower()
        password = options['password'] or User.give_password(12, 'normal')

        if not TenantService.exists(name):
            raise CommandError(f"Unexistent tenant: {name}")

        try:
            with TenantService.switch(name):
                user = User.objects.filter(email=email).first()
                if user:
                    self.stdout.write(self.style.WARNING(f"User {email} already exists. Updating password."))
                    user.set_password(password)
                    user.administrator = True
                    user.locked = False
                    user.save()
                else:
                    User.objects.create_superuser(
                        email=email,
                        password=password,
                        first_name=options['first_name'],
                        last_name=options['last_name'],
                    )
        except (TenantError, ValidationError) as exc:
            raise CommandError(f"Failed to create administrator: {exc}")

        self.stdout.write(self.style.SUCCESS(f"Administrator {email} ready in {name}"))
        if not options['password']:
            self.stdout.write(f"Generated password: {password}")
