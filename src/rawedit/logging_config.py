"""Logging setup for rawedit.

The terminal belongs to the editor while it runs, so records go to a
rotating log file by default; console output is opt-in. Raw key events are
traced on the separate ``rawedit.keyevents`` logger when ``keytrace`` is on.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Optional

logger = logging.getLogger("rawedit")
KEY_LOGGER = logging.getLogger("rawedit.keyevents")


def _rotating_handler(filename: str, level: int) -> logging.Handler | None:
    log_dir = os.path.dirname(filename)
    if log_dir and not os.path.exists(log_dir):
        try:
            os.makedirs(log_dir)
        except OSError as e_mkdir:
            print(f"Error creating log directory '{log_dir}': {e_mkdir}", file=sys.stderr)
            filename = os.path.join(tempfile.gettempdir(), os.path.basename(filename))
    try:
        handler = logging.handlers.RotatingFileHandler(
            filename, maxBytes=1024 * 1024, backupCount=3, encoding="utf-8"
        )
    except OSError as e_fh:
        print(f"Error setting up file logger for '{filename}': {e_fh}.", file=sys.stderr)
        return None
    handler.setLevel(level)
    return handler


def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Configure handlers from the ``logging`` section of ``config``.

    Recognised keys: ``file``, ``file_level``, ``log_to_console``,
    ``console_level`` and ``keytrace``. Existing handlers are replaced, so
    calling this twice does not duplicate records. Never raises.
    """
    if config is None:
        config = {}
    logging_config = config.get("logging", {})
    log_filename = logging_config.get("file") or os.path.join(
        tempfile.gettempdir(), "rawedit.log"
    )
    file_level = getattr(
        logging, str(logging_config.get("file_level", "INFO")).upper(), logging.INFO
    )

    file_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)-8s - %(name)-18s - %(message)s (%(filename)s:%(lineno)d)"
    )
    root_logger = logging.getLogger()
    root_logger.handlers = []

    file_handler = _rotating_handler(log_filename, file_level)
    if file_handler is not None:
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)

    if logging_config.get("log_to_console", False):
        console_level = getattr(
            logging,
            str(logging_config.get("console_level", "WARNING")).upper(),
            logging.WARNING,
        )
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter("%(levelname)-8s - %(name)-12s - %(message)s"))
        console_handler.setLevel(console_level)
        root_logger.addHandler(console_handler)

    root_logger.setLevel(file_level)

    KEY_LOGGER.propagate = False
    KEY_LOGGER.setLevel(logging.DEBUG)
    KEY_LOGGER.handlers = []
    if logging_config.get("keytrace", False):
        trace_name = os.path.join(os.path.dirname(log_filename), "rawedit-keytrace.log")
        trace_handler = _rotating_handler(trace_name, logging.DEBUG)
        if trace_handler is not None:
            trace_handler.setFormatter(logging.Formatter("%(asctime)s - %(message)s"))
            KEY_LOGGER.addHandler(trace_handler)
            KEY_LOGGER.disabled = False
            logger.info("Key event tracing enabled, logging to '%s'.", trace_name)
        else:
            KEY_LOGGER.disabled = True
    else:
        KEY_LOGGER.addHandler(logging.NullHandler())
        KEY_LOGGER.disabled = True

    logger.debug(
        "Logging setup complete. Root logger level: %s.",
        logging.getLevelName(root_logger.level),
    )
