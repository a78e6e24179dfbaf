# SPDX-License-Identifier: MIT

import logging

from rich.logging import RichHandler


def configure_logging(level: str = "WARNING") -> None:
    """Route every zeitedit logger through a single rich handler on stderr."""
    logger = logging.getLogger("zeitedit")
    logger.setLevel(level.upper())
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(
            RichHandler(show_path=False, rich_tracebacks=True, markup=False)
        )
    logger.propagate = False
