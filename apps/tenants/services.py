# apps/tenants/services.py
import logging
import shutil
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, List, Optional

from django.apps import apps
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.management import call_command
from django.db import connection, transaction
from django.db.migrations.recorder import MigrationRecorder
from django_tenants.utils import get_public_schema_name, schema_context, schema_exists

from apps.tenants.exceptions import TenantError
from apps.tenants.models import Tenant, Domain
from apps.tenants.registry import TenantRegistry
from apps.tenants.validators import AGGREGATION_NAME, validate_schema_name

logger = logging.getLogger(__name__)


class TenantService:
    """
    Lifecycle of tenant schemas: creation, migration, renaming, dropping
    and the cross-tenant aggregation schema.

    The list of tenants of the running environment is kept in
    ``settings.TENANTS_FILE``; schema work is delegated to django-tenants.
    """

    AGGREGATION_NAME = AGGREGATION_NAME

    _registry: Optional[TenantRegistry] = None

    # ------------------------------------------------------------------
    # Tenant list
    # ------------------------------------------------------------------

    @classmethod
    def registry(cls) -> TenantRegistry:
        """Registry for the configured file and environment, loaded once"""
        path = Path(settings.TENANTS_FILE)
        env = str(settings.ERP_ENV)
        registry = cls._registry
        if registry is None or registry.path != path or registry.env != env:
            registry = cls._registry = TenantRegistry(path, env)
        return registry

    @classmethod
    def reload(cls):
        """Forget the cached list so the next access reads the file again"""
        cls._registry = None

    @classmethod
    def list(cls) -> List[str]:
        return list(cls.registry())

    @classmethod
    def exists(cls, name) -> bool:
        return str(name) in cls.registry()

    @classmethod
    def clear(cls):
        registry = cls.registry()
        registry.clear()
        registry.write()
        logger.info("Cleared tenant list for %s", registry.env)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @classmethod
    def check(cls, name):
        """
        Forget a listed tenant whose schema has disappeared from the database
        """
        name = str(name)
        if cls.exists(name) and not schema_exists(name):
            logger.warning("Schema of listed tenant %s is missing, dropping it", name)
            cls.drop(name)

    @classmethod
    def current(cls) -> str:
        schema_name = getattr(connection, 'schema_name', None)
        if not schema_name or schema_name == get_public_schema_name():
            raise TenantError("No current tenant")
        return schema_name

    @classmethod
    def private_directory(cls, name=None) -> Path:
        """Directory holding the private files of a tenant (current by default)"""
        return Path(settings.PRIVATE_ROOT) / (str(name) if name else cls.current())

    @classmethod
    def create(cls, name, domain=None) -> Tenant:
        name = str(name)
        cls._validate(name)
        cls.check(name)
        if cls.exists(name):
            raise TenantError("Already existing tenant")

        with schema_context(get_public_schema_name()):
            with transaction.atomic():
                tenant = Tenant.objects.filter(schema_name=name).first()
                if tenant is None:
                    # django-tenants creates and migrates the schema on first save
                    tenant = Tenant(schema_name=name)
                    tenant.save()
                elif not schema_exists(name):
                    logger.warning("Tenant row %s has no schema, creating it", name)
                    tenant.create_schema(check_if_exists=True)
                if domain:
                    Domain.objects.get_or_create(
                        domain=domain,
                        defaults={'tenant': tenant, 'is_primary': True}
                    )

        registry = cls.registry()
        registry.add(name)
        registry.write()
        logger.info("Created tenant %s", name)
        return tenant

    @classmethod
    def drop(cls, name):
        name = str(name)
        if not cls.exists(name):
            raise TenantError(f"Unexistent tenant: {name}")

        with schema_context(get_public_schema_name()):
            if schema_exists(name):
                with connection.cursor() as cursor:
                    cursor.execute(f"DROP SCHEMA {cls._quote(name)} CASCADE")
            Tenant.objects.filter(schema_name=name).delete()

        shutil.rmtree(cls.private_directory(name), ignore_errors=True)

        registry = cls.registry()
        registry.remove(name)
        registry.write()
        logger.info("Dropped tenant %s", name)

    @classmethod
    def migrate(cls, name, to=None, up_to=None, down_to=None, app_label=None, verbosity=0):
        """
        Migrate a tenant schema to the latest state, or up/down to a target

        Targets are ``"<app_label>.<migration_name>"`` or a migration name
        together with ``app_label``.
        """
        name = str(name)
        if not cls.exists(name):
            raise TenantError(f"Unexistent tenant: {name}")

        target = to or up_to
        direction = 'up'
        if target is None and down_to is not None:
            target = down_to
            direction = 'down'

        args = []
        if target is not None:
            app_label, migration_name = cls._split_target(target, app_label)
            if direction == 'down' and not cls._is_applied(name, app_label, migration_name):
                raise TenantError(
                    f"Cannot migrate {name} down to {app_label}.{migration_name}: not applied"
                )
            args = [app_label, migration_name]
        elif app_label:
            args = [app_label]

        logger.info("Migrating tenant %s %s %s", name, direction, '.'.join(args) or 'to latest')
        call_command(
            'migrate_schemas',
            *args,
            schema_name=name,
            interactive=False,
            verbosity=verbosity,
        )

    @classmethod
    def rename(cls, old, new):
        old, new = str(old), str(new)
        cls.check(old)
        if not cls.exists(old):
            raise TenantError(f"Unexistent tenant: {old}")
        if cls.exists(new):
            raise TenantError(f"Already existing tenant: {new}")
        cls._validate(new)

        old_directory = cls.private_directory(old)
        new_directory = cls.private_directory(new)
        if old_directory.exists() and new_directory.exists():
            raise TenantError(f"Private directory already exists: {new_directory}")

        with schema_context(get_public_schema_name()):
            with transaction.atomic():
                with connection.cursor() as cursor:
                    cursor.execute(f"ALTER SCHEMA {cls._quote(old)} RENAME TO {cls._quote(new)}")
                Tenant.objects.filter(schema_name=old).update(schema_name=new)

        registry = cls.registry()
        registry.replace(old, new)
        registry.write()

        if old_directory.exists():
            old_directory.rename(new_directory)
        logger.info("Renamed tenant %s to %s", old, new)

    @classmethod
    @contextmanager
    def switch(cls, name):
        """Run the enclosed block inside the schema of the given tenant"""
        with schema_context(str(name)):
            yield str(name)

    @classmethod
    @contextmanager
    def switch_default(cls):
        names = cls.list()
        if not names:
            raise TenantError("No default tenant")
        with cls.switch(names[0]) as name:
            yield name

    @classmethod
    def reset_search_path(cls):
        """Point the connection back to the public schema"""
        if hasattr(connection, 'set_schema_to_public'):
            connection.set_schema_to_public()

    # ------------------------------------------------------------------
    # Aggregation schema
    # ------------------------------------------------------------------

    @classmethod
    def aggregated_tables(cls) -> Dict[str, List[str]]:
        """
        Tables of the aggregated tenant apps with their columns, by table name
        """
        tables = {}
        for app_config in apps.get_app_configs():
            if app_config.name not in settings.AGGREGATED_APPS:
                continue
            for model in app_config.get_models(include_auto_created=True):
                opts = model._meta
                if opts.proxy or not opts.managed or opts.db_table in tables:
                    continue
                tables[opts.db_table] = [field.column for field in opts.local_concrete_fields]
        return dict(sorted(tables.items()))

    @classmethod
    def aggregation_view_sql(cls, table, columns, tenants) -> str:
        quote = cls._quote
        column_list = ', '.join(quote(column) for column in columns)
        queries = [
            f"SELECT '{tenant}' AS tenant_name, {column_list} FROM {quote(tenant)}.{quote(table)}"
            for tenant in tenants
        ]
        return (
            f"CREATE VIEW {quote(cls.AGGREGATION_NAME)}.{quote(table)} AS "
            + " UNION ALL ".join(queries)
        )

    @classmethod
    def create_aggregation_schema(cls):
        """
        (Re)build one UNION ALL view per tenant table in the aggregation schema
        """
        tenants = cls.list()
        if not tenants:
            raise TenantError("No tenant to build an aggregation schema")
        for tenant in tenants:
            cls._validate(tenant)

        schema = cls._quote(cls.AGGREGATION_NAME)
        tables = cls.aggregated_tables()
        with schema_context(get_public_schema_name()):
            with transaction.atomic():
                with connection.cursor() as cursor:
                    cursor.execute(f"CREATE SCHEMA IF NOT EXISTS {schema}")
                    for table, columns in tables.items():
                        cursor.execute(f"DROP VIEW IF EXISTS {schema}.{cls._quote(table)}")
                        cursor.execute(cls.aggregation_view_sql(table, columns, tenants))
        logger.info("Built aggregation schema over %d tenant(s), %d view(s)", len(tenants), len(tables))

    @classmethod
    def drop_aggregation_schema(cls):
        with schema_context(get_public_schema_name()):
            with connection.cursor() as cursor:
                cursor.execute(f"DROP SCHEMA IF EXISTS {cls._quote(cls.AGGREGATION_NAME)} CASCADE")
        logger.info("Dropped aggregation schema")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _quote(identifier) -> str:
        return connection.ops.quote_name(identifier)

    @staticmethod
    def _validate(name):
        try:
            validate_schema_name(name)
        except ValidationError as exc:
            raise TenantError(f"Invalid tenant name {name!r}: {' '.join(exc.messages)}") from exc

    @staticmethod
    def _split_target(target, app_label=None):
        if '.' in target:
            app_label, migration_name = target.split('.', 1)
        else:
            migration_name = target
        if not app_label:
            raise TenantError(f"Migration target {target!r} needs an app label")
        return app_label, migration_name

    @staticmethod
    def _is_applied(name, app_label, migration_name) -> bool:
        if migration_name == 'zero':
            return True
        with schema_context(name):
            applied = MigrationRecorder(connection).applied_migrations()
        return any(
            label == app_label and applied_name.startswith(migration_name)
            for label, applied_name in applied
        )
