"""Console logging for the sitecontent CLI."""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = 'SITECONTENT_LOG_LEVEL'
DEFAULT_LEVEL_NAME = 'INFO'

console = Console(stderr=True)


def resolve_level() -> int:
    """Return the level named by $SITECONTENT_LOG_LEVEL (INFO if unset/unknown)."""
    level_name = os.getenv(LOG_LEVEL_ENV, DEFAULT_LEVEL_NAME).upper()
    level = getattr(logging, level_name, logging.INFO)
    return level if isinstance(level, int) else logging.INFO


def configure_logging() -> RichHandler:
    """Install one Rich handler on the root logger.

    Safe to call more than once; the handler installed by an earlier call
    is reused.
    """
    root_logger = logging.getLogger()

    handler = None
    for existing in root_logger.handlers:
        if isinstance(existing, RichHandler) and getattr(existing, '_sitecontent_managed', False):
            handler = existing
            break

    if handler is None:
        handler = RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter('%(message)s'))
        handler._sitecontent_managed = True
        root_logger.addHandler(handler)

    root_logger.setLevel(resolve_level())
    logging.captureWarnings(True)
    return handler
