import hashlib
from datetime import date
from decimal import Decimal

from django.contrib.auth import authenticate
from django.core.exceptions import ValidationError
from django.test import TestCase

from apps.entities.models import Entity
from apps.users.models import Notification, Preference, Role, User


class UserTestCase(TestCase):
    def setUp(self):
        self.admin = User.objects.create_superuser(
            email='Admin@Example.org', password='secret', first_name='Ada', last_name='Admin'
        )
        self.role = Role(name='Seller', rights={'sales': ['write']})
        self.role.save()

    def create_user(self, email='seller@example.org', **extra):
        extra.setdefault('role', self.role)
        return User.objects.create_user(
            email=email, password='secret', first_name='Sam', last_name='Seller', **extra
        )


class UserLifecycleTests(UserTestCase):

    def test_defaults(self):
        user = self.create_user()
        self.assertEqual(self.admin.email, 'admin@example.org')
        self.assertEqual(user.language, 'en')
        self.assertTrue(user.authentication_token)
        self.assertEqual(user.rights, {'entities': ['read'], 'sales': ['read', 'write']})
        self.assertIsInstance(user.person, Entity)
        self.assertEqual(user.person.full_name, 'Sam Seller')
        self.assertEqual(user.name, 'Sam Seller')

    def test_role_completes_rights(self):
        self.assertEqual(self.role.rights, {'entities': ['read'], 'sales': ['read', 'write']})

    def test_role_required_for_non_administrators(self):
        with self.assertRaises(ValidationError) as context:
            self.create_user(role=None)
        self.assertIn('role', context.exception.message_dict)

    def test_reduction_percentage_bounds(self):
        with self.assertRaises(ValidationError):
            self.create_user(maximal_grantable_reduction_percentage=Decimal('120'))

    def test_last_administrator_is_kept(self):
        self.admin.administrator = False
        self.admin.role = self.role
        with self.assertRaises(ValidationError) as context:
            self.admin.save()
        self.assertIn('administrator', context.exception.message_dict)

        self.admin.refresh_from_db()

        with self.assertRaises(ValidationError):
            self.admin.delete()

    def test_administrator_can_step_down_when_not_alone(self):
        self.create_user(email='second@example.org', administrator=True)
        self.admin.administrator = False
        self.admin.role = self.role
        self.admin.save()
        self.assertFalse(User.objects.get(pk=self.admin.pk).administrator)

    def test_delete_user(self):
        user = self.create_user()
        user.delete()
        self.assertFalse(User.objects.filter(pk=user.pk).exists())

    def test_person_cannot_change(self):
        user = self.create_user()
        other = Entity(last_name='Durand')
        other.save()
        user.person = other
        with self.assertRaises(ValidationError) as context:
            user.save()
        self.assertIn('person', context.exception.message_dict)

    def test_person_is_not_shared(self):
        user = self.create_user()
        other = User(
            email='clerk@example.org', first_name='Cleo', last_name='Clerk',
            role=self.role, person=user.person,
        )
        other.set_password('secret')
        with self.assertRaises(ValidationError) as context:
            other.save()
        self.assertIn('person', context.exception.message_dict)
        self.assertEqual(user.person.user, user)

    def test_lock_and_authentication(self):
        user = self.create_user()
        self.assertEqual(authenticate(email='SELLER@example.org', password='secret'), user)
        self.assertIsNone(authenticate(email='seller@example.org', password='wrong'))
        self.assertIsNone(authenticate(email='nobody@example.org', password='secret'))

        user.lock()
        self.assertTrue(User.objects.get(pk=user.pk).locked)
        self.assertIsNone(authenticate(email='seller@example.org', password='secret'))

        user.unlock()
        self.assertEqual(authenticate(email='seller@example.org', password='secret'), user)

    def test_generate_password(self):
        self.assertEqual(User.generate_password(0), '')
        self.assertEqual(len(User.generate_password(12, 'dummy')), 12)
        self.assertTrue(set(User.generate_password(50, 'simple')) <= set(
            'abcdefghjkmnopqrstuwxyABCDEFGHJKMNPQRTUWYX346789'
        ))
        self.assertEqual(len(User.give_password()), 8)

    def test_avatar_url(self):
        digest = hashlib.md5(b'admin@example.org').hexdigest()
        self.assertEqual(self.admin.avatar_url(), f'https://secure.gravatar.com/avatar/{digest}?size=200')
        self.assertTrue(self.admin.avatar_url(80).endswith('?size=80'))


class UserRightsTests(UserTestCase):

    def test_can(self):
        user = self.create_user()
        self.assertTrue(user.can('write', 'sales'))
        self.assertTrue(user.can('read', 'entities'))
        self.assertFalse(user.can('write', 'products'))
        self.assertTrue(self.admin.can('write', 'products'))
        self.assertIn('write-sales', user.rights_array)

    def test_authorization(self):
        user = self.create_user()
        self.assertIsNone(user.authorization('sales', 'create'))
        self.assertIsNone(user.authorization('me', 'show'))
        self.assertIsNone(user.authorization('authentication', 'sign_in'))
        self.assertIn('this user', user.authorization('products', 'create'))
        self.assertIn('rockets#launch', user.authorization('rockets', 'launch'))
        self.assertIsNone(self.admin.authorization('products', 'create'))

    def test_can_access(self):
        user = self.create_user()
        self.assertTrue(user.can_access('sales#index'))
        self.assertTrue(user.can_access({'controller': '/sales', 'action': 'create'}))
        self.assertFalse(user.can_access('products#create'))
        self.assertTrue(user.can_access('notifications#index'))
        self.assertTrue(user.can_access('rockets#launch'))
        self.assertTrue(self.admin.can_access('products#create'))
        with self.assertRaises(ValueError):
            user.can_access({'controller': 'sales'})


class PreferenceTests(UserTestCase):

    def test_typed_values(self):
        values = {
            'items.per_page': 25,
            'reduction': Decimal('2.5'),
            'interface.dark': True,
            'campaign.started_on': date(2024, 1, 1),
            'theme': 'tekyla',
        }
        for name, value in values.items():
            self.admin.prefer(name, value)
        for name, value in values.items():
            with self.subTest(name=name):
                preference = Preference.objects.get(user=self.admin, name=name)
                self.assertEqual(preference.value, value)

    def test_preference_creates_default(self):
        preference = self.admin.preference('items.per_page', 20)
        self.assertEqual(preference.value, 20)
        self.admin.prefer('items.per_page', 50)
        self.assertEqual(self.admin.preference('items.per_page', 20).value, 50)
        self.assertEqual(self.admin.preferences.count(), 1)

    def test_invalid_raw_value(self):
        preference = Preference(user=self.admin, name='count', nature=Preference.NATURE_INTEGER, raw_value='many')
        with self.assertRaises(ValidationError):
            preference.save()


class NotificationTests(UserTestCase):

    def test_notify(self):
        user = self.create_user()
        notification = user.notify('Sale %(number)s invoiced', {'number': 'S00001'}, target=self.role)

        self.assertEqual(notification.label, 'Sale S00001 invoiced')
        self.assertEqual(notification.target, self.role)
        self.assertEqual(list(user.unread_notifications), [notification])

        notification.mark_as_read()
        self.assertEqual(list(user.unread_notifications), [])

    def test_notify_administrators(self):
        self.create_user(email='second@example.org', administrator=True)
        self.create_user()
        User.notify_administrators('Backup done', level=Notification.LEVEL_SUCCESS)
        self.assertEqual(Notification.objects.count(), 2)
        self.assertEqual(
            set(Notification.objects.values_list('recipient__email', flat=True)),
            {'admin@example.org', 'second@example.org'},
        )
