from django.test import SimpleTestCase

from apps.users.access import Access, MINIMUM, PUBLIC


class AccessTests(SimpleTestCase):
    def test_resources(self):
        resources = Access.resources()
        self.assertEqual(resources['products'], ['read', 'write'])
        self.assertEqual(resources['settings'], ['write'])
        self.assertNotIn(PUBLIC, resources)
        self.assertTrue(Access.exists('read', 'sales'))
        self.assertFalse(Access.exists('read', 'settings'))
        self.assertIn('write-subscriptions', Access.all_rights())

    def test_rights_of(self):
        self.assertEqual(Access.rights_of('products#index'), ['read-products'])
        self.assertEqual(Access.rights_of('/products#update'), ['write-products'])
        self.assertEqual(Access.rights_of('authentication#sign_in'), [PUBLIC])
        self.assertEqual(Access.rights_of('me#show'), [MINIMUM])
        self.assertEqual(Access.rights_of('unknown#index'), [])

    def test_controllers(self):
        controllers = Access.controllers()
        self.assertIn('create', controllers['products'])
        self.assertIn('sign_in', controllers['authentication'])
        self.assertIn('add_member', controllers['product_groups'])

    def test_complete_adds_dependencies(self):
        self.assertEqual(
            Access.complete({'sales': ['write']}),
            {'entities': ['read'], 'sales': ['read', 'write']},
        )

    def test_complete_drops_unknown_rights(self):
        self.assertEqual(
            Access.complete({'products': ['read', 'fly'], 'rockets': ['write'], 'entities': None}),
            {'products': ['read']},
        )
        self.assertEqual(Access.complete(None), {})
