"""
Default location of the configuration file.

The file lives in a single directory per user. ``WTCONFIG_HOME`` overrides the
directory; otherwise the user's home directory is used.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILE_NAME = ".writingtool.cfg"
CONFIG_HOME_ENV = "WTCONFIG_HOME"


def default_config_dir() -> Path:
    """
    Resolve the directory holding the configuration file.

    Preference order:
    1) ``WTCONFIG_HOME`` if set and non-empty
    2) the user's home directory
    """
    override = os.environ.get(CONFIG_HOME_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home()


def default_config_path() -> Path:
    """Return the full path of the default configuration file."""
    return default_config_dir() / CONFIG_FILE_NAME
