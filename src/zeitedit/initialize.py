# SPDX-License-Identifier: MIT

import logging

from yaml import dump

try:
    from yaml import CSafeDumper as Dumper
except ImportError:
    from yaml import SafeDumper as Dumper  # type: ignore[assignment]

from zeitedit import configuration
from zeitedit.log import configure_logging
from zeitedit.repository.configuration import CONFIGURATION_REPO
from zeitedit.version.version import Version
from zeitedit.view import state as view_state

logger = logging.getLogger(__name__)


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    __ensure_config_files()
    configuration.load_data_path_configuration()

    config = CONFIGURATION_REPO.get_config()
    configure_logging(config.get("log_level", "WARNING"))

    __ensure_data_files()

    if config["use_git_versioning"]:
        version = Version()
        version.initialize_data_versioning()
    view_state.set_show_header(config["show_header"])


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        config = configuration.get_default_configuration()
        configuration.APP_CONFIG_PATH.write_text(
            dump(dict(config), Dumper=Dumper, sort_keys=False)
        )
        logger.info("wrote default configuration to %s", configuration.APP_CONFIG_PATH)


def __ensure_data_files() -> None:
    if not configuration.DATA_ENTRIES_DIR.is_dir():
        configuration.DATA_ENTRIES_DIR.mkdir(parents=True, exist_ok=True)
        (configuration.DATA_ENTRIES_DIR / ".gitkeep").touch()
