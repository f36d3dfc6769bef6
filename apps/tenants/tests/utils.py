import tempfile
from pathlib import Path
from unittest import mock

from django.test import override_settings

from apps.tenants.services import TenantService


class TenantServiceMixin:
    """
    Isolate TenantService from PostgreSQL: temporary tenant list and private
    root, mocked schema helpers and raw connection
    """
    existing_schemas = ()

    def setUp(self):
        super().setUp()
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.tmp_path = Path(tmp.name)

        overrides = override_settings(
            ERP_ENV='test',
            TENANTS_FILE=self.tmp_path / 'tenants.yml',
            PRIVATE_ROOT=self.tmp_path / 'private',
        )
        overrides.enable()
        self.addCleanup(overrides.disable)
        TenantService.reload()
        self.addCleanup(TenantService.reload)

        self.schemas = set(self.existing_schemas)
        self.schema_exists = self._patch('apps.tenants.services.schema_exists')
        self.schema_exists.side_effect = lambda name: name in self.schemas
        self.schema_context = self._patch('apps.tenants.services.schema_context')
        self.connection = self._patch('apps.tenants.services.connection')
        self.connection.ops.quote_name.side_effect = lambda name: f'"{name}"'
        self.cursor = self.connection.cursor.return_value.__enter__.return_value

    def _patch(self, target):
        patcher = mock.patch(target)
        mocked = patcher.start()
        self.addCleanup(patcher.stop)
        return mocked

    def register(self, *names):
        registry = TenantService.registry()
        for name in names:
            registry.add(name)
            self.schemas.add(name)
        registry.write()

    def executed(self):
        return [call.args[0] for call in self.cursor.execute.call_args_list]
