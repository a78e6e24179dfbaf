# SPDX-License-Identifier: MIT

import logging
import os
import shlex
import subprocess
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from zeitedit.errors import EditorFailedError

logger = logging.getLogger(__name__)

DEFAULT_EDITOR = "vi"


def resolve_editor_command(configured: Optional[str] = None) -> str:
    """Pick the editor: configuration first, then $VISUAL, then $EDITOR, then vi."""
    for candidate in (
        configured,
        os.environ.get("VISUAL"),
        os.environ.get("EDITOR"),
    ):
        if candidate is not None and candidate.strip() != "":
            return candidate
    return DEFAULT_EDITOR


@contextmanager
def editable_file(text: str, suffix: str = ".yaml") -> Iterator[Path]:
    """Write `text` to a temp file that is removed however the block exits."""
    fd, name = tempfile.mkstemp(prefix="zeitedit-", suffix=suffix)
    path = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        yield path
    finally:
        path.unlink(missing_ok=True)
        logger.debug("removed %s", path)


class ExternalEditor:
    """Hands text to an external editor process and blocks until it exits."""

    def __init__(self, command: Optional[str] = None) -> None:
        self.command = resolve_editor_command(command)

    def __call__(self, text: str) -> str:
        try:
            with editable_file(text) as path:
                return self.__run(path)
        except (OSError, UnicodeError) as e:
            raise EditorFailedError(self.command, cause=e) from e

    def __run(self, path: Path) -> str:
        try:
            args = shlex.split(self.command) + [str(path)]
        except ValueError as e:
            raise EditorFailedError(self.command, cause=e) from e
        logger.debug("running editor: %s", args)
        result = subprocess.run(args)
        if result.returncode != 0:
            raise EditorFailedError(self.command, returncode=result.returncode)
        return path.read_text(encoding="utf-8")
