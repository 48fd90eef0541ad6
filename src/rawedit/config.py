"""Runtime configuration.

There is no configuration file. The built-in defaults are merged with a few
``RAWEDIT_*`` environment variables, and bad values fall back to the
defaults with a warning.
"""

from __future__ import annotations

import logging
import os
import tempfile
from typing import Any, Mapping

from .constants import (
    RAWEDIT_MESSAGE_TIMEOUT,
    RAWEDIT_QUERY_LEN,
    RAWEDIT_QUIT_TIMES,
    RAWEDIT_TAB_STOP,
)
from .models import Session

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "editor": {
        "tab_stop": RAWEDIT_TAB_STOP,
        "quit_times": RAWEDIT_QUIT_TIMES,
        "message_timeout": RAWEDIT_MESSAGE_TIMEOUT,
        "query_len": RAWEDIT_QUERY_LEN,
    },
    "logging": {
        "file": os.path.join(tempfile.gettempdir(), "rawedit.log"),
        "file_level": "INFO",
        "log_to_console": False,
        "console_level": "WARNING",
        "keytrace": False,
    },
}

TRUE_VALUES = {"1", "true", "yes", "on"}


def deep_merge(base: dict, override: Mapping) -> dict:
    """Recursively merge ``override`` into a copy of ``base``."""
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, Mapping):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _positive_int(name: str, raw: str) -> int | None:
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return None
    if value <= 0:
        logger.warning("Ignoring %s=%r: must be positive", name, raw)
        return None
    return value


def env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {"editor": {}, "logging": {}}

    raw = environ.get("RAWEDIT_TAB_STOP")
    if raw:
        tab_stop = _positive_int("RAWEDIT_TAB_STOP", raw)
        if tab_stop is not None:
            overrides["editor"]["tab_stop"] = tab_stop

    if environ.get("RAWEDIT_LOG_FILE"):
        overrides["logging"]["file"] = environ["RAWEDIT_LOG_FILE"]
    if environ.get("RAWEDIT_LOG_LEVEL"):
        overrides["logging"]["file_level"] = environ["RAWEDIT_LOG_LEVEL"].upper()
    if "RAWEDIT_KEYTRACE" in environ:
        overrides["logging"]["keytrace"] = environ["RAWEDIT_KEYTRACE"].lower() in TRUE_VALUES

    return overrides


def load_config(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    environ = os.environ if environ is None else environ
    return deep_merge(DEFAULT_CONFIG, env_overrides(environ))


def apply_config(session: Session, config: Mapping[str, Any]) -> None:
    editor = config.get("editor", {})
    session.tab_stop = editor.get("tab_stop", RAWEDIT_TAB_STOP)
    session.quit_times = editor.get("quit_times", RAWEDIT_QUIT_TIMES)
    session.message_timeout = editor.get("message_timeout", RAWEDIT_MESSAGE_TIMEOUT)
    session.query_len = editor.get("query_len", RAWEDIT_QUERY_LEN)
