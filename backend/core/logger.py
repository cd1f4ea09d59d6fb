# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Centralised logging configuration.

Levels, handlers and formats live in etc/logging.conf.  The file references
the log path through a ``%(log_file)s`` placeholder which is resolved here
before the text is handed to the standard-library fileConfig loader.

The root application logger is ``sitepress``; feature modules log through a
child so the origin shows up in every record:

    from core.logger import get_logger
    log = get_logger("auth.local")      # -> "sitepress.auth.local"
"""

import configparser
import logging
import logging.config
import os
from pathlib import Path

# project root: backend/core/logger.py  →  ../../  →  sitepress/
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

# Both paths can be redirected from the environment (containers, tests).
_LOG_DIR = Path(os.environ.get("SITEPRESS_LOG_DIR", _PROJECT_ROOT / "log"))
_LOG_FILE = _LOG_DIR / "app.log"
_LOGGING_CONF = Path(
    os.environ.get("SITEPRESS_LOGGING_CONF", _PROJECT_ROOT / "etc" / "logging.conf")
)


def _read_config(conf_path: Path, log_file: Path) -> configparser.RawConfigParser:
    """
    Load *conf_path* with the log-file placeholder substituted.

    RawConfigParser is required: the format strings contain %(asctime)s etc.
    which an interpolating ConfigParser would choke on.
    """
    raw = conf_path.read_text(encoding="utf-8").replace("%(log_file)s", str(log_file))
    parser = configparser.RawConfigParser()
    parser.read_string(raw)
    return parser


def _configure() -> None:
    # The rotating handler opens the file eagerly, so the directory must exist.
    _LOG_DIR.mkdir(parents=True, exist_ok=True)
    logging.config.fileConfig(
        _read_config(_LOGGING_CONF, _LOG_FILE),
        disable_existing_loggers=False,
    )


_configure()

# ---------------------------------------------------------------------------
# Module-level handle
# ---------------------------------------------------------------------------
logger = logging.getLogger("sitepress")


def get_logger(name: str) -> logging.Logger:
    """Return the ``sitepress.<name>`` child logger."""
    return logger.getChild(name)
