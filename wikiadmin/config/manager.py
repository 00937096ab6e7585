"""Config manager.

Reads and writes wiki configuration stored in the ``configs`` table.
Lookup order for ``get_config``: database value, then the env-var value
mapped in ``ENV_VAR_SETTINGS``, then ``CONFIG_DEFAULTS``. ``None`` means
the key is not configured anywhere.
"""

import json
import logging
from typing import Annotated, Any

from fastapi import Depends
from sqlmodel import Session, select

from wikiadmin.config.keys import CONFIG_DEFAULTS, CROWI, ENV_VAR_SETTINGS
from wikiadmin.config.models import Config
from wikiadmin.core.deps import SessionDep, SettingsDep
from wikiadmin.core.settings import Settings

logger = logging.getLogger(__name__)


class ConfigManager:
    def __init__(self, session: Session, settings: Settings):
        self._session = session
        self._settings = settings

    def get_config(self, namespace: str, key: str) -> Any:
        value = self.get_config_from_db(namespace, key)
        if value is not None:
            return value

        value = self.get_config_from_env_vars(namespace, key)
        if value is not None:
            return value

        if namespace == CROWI:
            return CONFIG_DEFAULTS.get(key)
        return None

    def get_config_from_db(self, namespace: str, key: str) -> Any:
        row = self._find(namespace, key)
        if row is None:
            return None
        return json.loads(row.value)

    def get_config_from_env_vars(self, namespace: str, key: str) -> Any:
        if namespace != CROWI:
            return None
        attr = ENV_VAR_SETTINGS.get(key)
        if attr is None:
            return None
        return getattr(self._settings, attr)

    def update_configs(self, namespace: str, configs: dict[str, Any]) -> None:
        """Upsert several keys in one transaction.

        A ``None`` value removes the key so lower-priority sources apply again.
        """
        for key, value in configs.items():
            row = self._find(namespace, key)
            if value is None:
                if row is not None:
                    self._session.delete(row)
                continue

            encoded = json.dumps(value)
            if row is None:
                row = Config(ns=namespace, key=key, value=encoded)
            else:
                row.value = encoded
            self._session.add(row)

        self._session.commit()
        logger.info(
            "Updated %d config(s) in %s: %s",
            len(configs),
            namespace,
            ", ".join(configs),
        )

    def _find(self, namespace: str, key: str) -> Config | None:
        return self._session.exec(
            select(Config).where(Config.ns == namespace, Config.key == key)
        ).first()


def get_config_manager(session: SessionDep, settings: SettingsDep) -> ConfigManager:
    return ConfigManager(session, settings)


ConfigManagerDep = Annotated[ConfigManager, Depends(get_config_manager)]
