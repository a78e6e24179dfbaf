# SPDX-License-Identifier: MIT

import logging
import shutil
import subprocess
from pathlib import Path

from zeitedit.errors import StoreError

logger = logging.getLogger(__name__)


class Git:
    """Runs git against a single working tree rooted at `folder`."""

    def __init__(self, folder: Path) -> None:
        self.folder = folder

    def is_repo(self) -> bool:
        # A data dir nested in some other checkout does not count
        result = self.__run("rev-parse", "--show-toplevel", check=False)
        if result.returncode != 0:
            return False
        return Path(result.stdout.strip()).resolve() == self.folder.resolve()

    def init(self) -> None:
        self.__run("init")
        logger.info("initialized git repository in %s", self.folder)

    def commit_all(self, message: str) -> None:
        self.__run("add", "-A")
        if self.__run("status", "--porcelain").stdout.strip() == "":
            logger.debug("nothing to commit for '%s'", message)
            return
        self.__run("commit", "-m", message)
        logger.debug("committed '%s'", message)

    def __run(self, *args: str, check: bool = True) -> subprocess.CompletedProcess:
        if shutil.which("git") is None:
            raise StoreError("git versioning is enabled but git is not installed")

        command = ["git", "-C", str(self.folder.resolve()), *args]
        try:
            result = subprocess.run(command, text=True, capture_output=True)
        except OSError as e:
            raise StoreError(f"could not run git {args[0]}", e) from e
        logger.debug("%s -> %d", " ".join(command), result.returncode)

        if check and result.returncode != 0:
            raise StoreError(
                f"git {args[0]} failed in {self.folder}: {_output(result)}"
            )
        return result


def _output(result: subprocess.CompletedProcess) -> str:
    output = result.stderr.strip() or result.stdout.strip()
    return output or f"exit status {result.returncode}"
