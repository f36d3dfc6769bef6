import logging
from functools import lru_cache
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

RIGHTS_FILE = Path(__file__).resolve().parent / 'rights.yml'

PUBLIC = '__public__'
MINIMUM = '__minimum__'


class Access:
    """
    Catalogue of access rights: which ``"<action>-<resource>"`` rights grant
    which ``"controller#action"`` keys
    """

    @staticmethod
    @lru_cache(maxsize=None)
    def catalogue():
        with RIGHTS_FILE.open('r', encoding='utf-8') as stream:
            return yaml.safe_load(stream) or {}

    @classmethod
    def resources(cls):
        """Resources with their actions: ``{resource: [action, ...]}``"""
        return {
            resource: list(actions.keys())
            for resource, actions in cls.catalogue().items()
            if resource not in (PUBLIC, MINIMUM)
        }

    @classmethod
    def exists(cls, action, resource):
        return str(action) in cls.resources().get(str(resource), [])

    @classmethod
    def all_rights(cls):
        return [
            f"{action}-{resource}"
            for resource, actions in cls.resources().items()
            for action in actions
        ]

    @classmethod
    def keys_of(cls, action, resource):
        """The controller#action keys granted by one right"""
        definition = cls.catalogue().get(str(resource), {}).get(str(action)) or {}
        return list(definition.get('actions', []))

    @classmethod
    def dependencies_of(cls, action, resource):
        definition = cls.catalogue().get(str(resource), {}).get(str(action)) or {}
        return list(definition.get('dependencies', []))

    @classmethod
    def rights_of(cls, key):
        """Rights granting a controller#action key, special rights included"""
        key = str(key).lstrip('/')
        catalogue = cls.catalogue()
        rights = [special for special in (PUBLIC, MINIMUM) if key in catalogue.get(special, [])]
        for resource, actions in cls.resources().items():
            for action in actions:
                if key in cls.keys_of(action, resource):
                    rights.append(f"{action}-{resource}")
        return rights

    @classmethod
    def controllers(cls):
        """Known actions by controller, from every key of the catalogue"""
        catalogue = cls.catalogue()
        keys = list(catalogue.get(PUBLIC, [])) + list(catalogue.get(MINIMUM, []))
        for resource, actions in cls.resources().items():
            for action in actions:
                keys.extend(cls.keys_of(action, resource))
        controllers = {}
        for key in keys:
            controller, _, action = key.partition('#')
            controllers.setdefault(controller, set()).add(action)
        return controllers

    @classmethod
    def complete(cls, rights):
        """
        Rights mapping ``{resource: [actions]}`` with unknown rights removed
        and every dependency added
        """
        completed = {}
        pending = [
            (str(action), str(resource))
            for resource, actions in (rights or {}).items()
            for action in (actions or [])
        ]
        while pending:
            action, resource = pending.pop()
            if not cls.exists(action, resource):
                logger.debug("Ignoring unknown right %s-%s", action, resource)
                continue
            actions = completed.setdefault(resource, [])
            if action in actions:
                continue
            actions.append(action)
            for dependency in cls.dependencies_of(action, resource):
                dep_action, _, dep_resource = dependency.partition('-')
                pending.append((dep_action, dep_resource))
        return {resource: sorted(actions) for resource, actions in sorted(completed.items())}
