# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

from yaml import load

try:
    from yaml import CSafeLoader as Loader
except ImportError:
    from yaml import SafeLoader as Loader  # type: ignore[assignment]

from zeitedit import configuration


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        loaded = None
        if configuration.APP_CONFIG_PATH.is_file():
            loaded = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)

        self._config = configuration.get_default_configuration()
        if loaded is not None:
            # Missing keys keep their defaults so older config files still load
            self._config.update(loaded)  # type: ignore[typeddict-item]

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def get_user(self) -> str:
        return self.config["default_user"] or configuration.get_login_user()


CONFIGURATION_REPO = ConfigurationRepository()
