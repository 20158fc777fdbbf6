import logging
import os
import sys
from typing import Optional, Union

from .core.utils.rich_ui import (
    DEBUG_LOG_FORMAT,
    LOG_FORMAT,
    get_rich_handler,
    is_rich_enabled,
)


def setup_logging(
    level: Union[int, str] = logging.INFO, stream=sys.stdout, fmt: Optional[str] = None
):
    """
    Sets up the root logger with a stream handler and basic formatting.
    Uses the Rich handler when FXPACK_RICH_UI is enabled, otherwise falls back
    to standard logging. Does nothing if handlers are already configured.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    if not root_logger.hasHandlers():
        if is_rich_enabled():
            handler = get_rich_handler()
            # INFO output is left to the Rich progress display
            if level <= logging.INFO:
                level = logging.WARNING
        else:
            if fmt is None:
                fmt = DEBUG_LOG_FORMAT if level == logging.DEBUG else LOG_FORMAT

            handler = logging.StreamHandler(stream)
            handler.setFormatter(logging.Formatter(fmt))

        root_logger.setLevel(level)
        root_logger.addHandler(handler)

    # Optionally allow log level override via env var
    env_level = os.environ.get("LOG_LEVEL")
    if env_level:
        root_logger.setLevel(env_level.upper())
