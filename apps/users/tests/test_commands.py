from contextlib import nullcontext
from io import StringIO
from unittest import mock

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from apps.tenants.services import TenantService
from apps.users.models import User


class CreateAdministratorCommandTests(TestCase):
    def setUp(self):
        for name, kwargs in (
            ('exists', {'side_effect': lambda name: name == 'farm'}),
            ('switch', {'side_effect': lambda name: nullcontext(name)}),
        ):
            patcher = mock.patch.object(TenantService, name, **kwargs)
            patcher.start()
            self.addCleanup(patcher.stop)

    def test_create(self):
        out = StringIO()
        call_command('create_administrator', 'farm', email='Boss@Example.org', password='secret', stdout=out)

        user = User.objects.get(email='boss@example.org')
        self.assertTrue(user.administrator)
        self.assertTrue(user.check_password('secret'))
        self.assertIn('Administrator boss@example.org ready in farm', out.getvalue())

    def test_reset_password(self):
        User.objects.create_superuser(email='boss@example.org', password='old', first_name='B', last_name='Oss')
        out = StringIO()
        call_command('create_administrator', 'farm', email='boss@example.org', stdout=out)

        self.assertIn('Generated password', out.getvalue())
        self.assertFalse(User.objects.get(email='boss@example.org').check_password('old'))

    def test_unknown_tenant(self):
        with self.assertRaisesMessage(CommandError, 'Unexistent tenant: north'):
            call_command('create_administrator', 'north', email='boss@example.org')
