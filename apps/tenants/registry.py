import logging
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)


class TenantRegistry:
    """
    Tenant names known to each environment, persisted as a YAML mapping::

        development:
        - demo
        - farm_north
        test: []
    """

    def __init__(self, path, env):
        self.path = Path(path)
        self.env = str(env)
        self._data = None

    def _load(self):
        if self._data is None:
            data = {}
            if self.path.exists():
                with self.path.open('r', encoding='utf-8') as stream:
                    data = yaml.safe_load(stream) or {}
            if not isinstance(data, dict):
                raise ValueError(f"Invalid tenant list in {self.path}: mapping expected")
            if data.get(self.env) is None:
                data[self.env] = []
            self._data = data
        return self._data

    @property
    def names(self):
        return self._load()[self.env]

    def __contains__(self, name):
        return name in self.names

    def __iter__(self):
        return iter(list(self.names))

    def __len__(self):
        return len(self.names)

    def add(self, name):
        if name not in self.names:
            self.names.append(name)

    def remove(self, name):
        if name in self.names:
            self.names.remove(name)

    def replace(self, old, new):
        names = self.names
        if old in names:
            names[names.index(old)] = new
        elif new not in names:
            names.append(new)

    def clear(self):
        self._load()[self.env] = []

    def write(self):
        data = self._load()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open('w', encoding='utf-8') as stream:
            yaml.safe_dump(data, stream, default_flow_style=False)
        logger.debug("Wrote %d tenant(s) for %s to %s", len(self.names), self.env, self.path)
