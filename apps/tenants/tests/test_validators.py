from django.core.exceptions import ValidationError
from django.test import SimpleTestCase

from apps.tenants.validators import validate_schema_name


class ValidateSchemaNameTests(SimpleTestCase):
    def test_valid_names(self):
        for name in ('farm', 'farm_north', '_private', 'f2024', 'a' * 63):
            with self.subTest(name=name):
                validate_schema_name(name)

    def test_invalid_names(self):
        for name in ('', 'Farm', '2farm', 'farm-north', 'farm north', 'a' * 64, 'ferme"; drop'):
            with self.subTest(name=name):
                with self.assertRaises(ValidationError):
                    validate_schema_name(name)

    def test_reserved_names(self):
        for name in ('public', '__all__', 'information_schema', 'pg_catalog'):
            with self.subTest(name=name):
                with self.assertRaises(ValidationError):
                    validate_schema_name(name)
