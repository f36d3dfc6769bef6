import re

from django.core.exceptions import ValidationError
from django_tenants.utils import get_public_schema_name

SCHEMA_NAME_PATTERN = re.compile(r'^[a-z_][a-z0-9_]{0,62}$')

AGGREGATION_NAME = '__all__'


def validate_schema_name(value):
    """
    Schema names end up in raw DDL, only accept plain lowercase identifiers
    """
    if not value or not SCHEMA_NAME_PATTERN.match(value):
        raise ValidationError(
            'Schema name must start with a letter or underscore and contain only '
            'lowercase letters, digits and underscores (63 characters max).',
            code='invalid_schema_name',
        )
    if value.startswith('pg_'):
        raise ValidationError('Schema names starting with "pg_" are reserved.', code='reserved_schema_name')
    if value in (get_public_schema_name(), AGGREGATION_NAME, 'information_schema'):
        raise ValidationError(f'"{value}" is a reserved schema name.', code='reserved_schema_name')
