# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional

from zeitedit import configuration
from zeitedit.version.git import Git


class Version:
    def __init__(self, data_path: Optional[Path] = None) -> None:
        self.git = Git(data_path or configuration.DATA_PATH)

    def initialize_data_versioning(self) -> None:
        if not self.git.is_repo():
            self.git.init()

    def create_data_checkpoint(self, message: str) -> None:
        # Versioning may be switched on after the data dir was first created
        self.initialize_data_versioning()
        self.git.commit_all(message)
