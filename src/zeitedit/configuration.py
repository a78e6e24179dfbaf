# SPDX-License-Identifier: MIT

import getpass
from pathlib import Path
from typing import NotRequired, Optional, TypedDict

from yaml import load

try:
    from yaml import CSafeLoader as Loader
except ImportError:
    from yaml import SafeLoader as Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "zeitedit"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# Reassigned by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_ENTRIES_DIR: Path = DATA_PATH / "entries"


class Configuration(TypedDict):
    data_path: Optional[str]
    default_user: Optional[str]
    editor: Optional[str]
    use_git_versioning: bool
    show_header: bool
    log_level: NotRequired[str]


def get_default_configuration() -> Configuration:
    return {
        "data_path": None,
        "default_user": None,
        "editor": None,
        "use_git_versioning": False,
        "show_header": True,
        "log_level": "WARNING",
    }


def get_login_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "default"


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories are instantiated.
    """
    global DATA_PATH, DATA_ENTRIES_DIR

    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return
    data_path_setting = config.get("data_path")

    if data_path_setting is not None:
        DATA_PATH = Path(data_path_setting).expanduser()
        DATA_ENTRIES_DIR = DATA_PATH / "entries"
