"""Shared constants for niribar."""

import os
from pathlib import Path

__all__ = [
    "CONFIG_FILE",
    "CONFIG_SECTION",
    "CONNECT_RETRY_DELAY",
    "DEFAULT_CONNECT_RETRIES",
    "EVENT_STREAM_REQUEST",
    "NIRI_SOCKET_ENV",
    "STREAM_LIMIT",
    "VERSION",
]

VERSION = "0.3.0"

# Config file path - use XDG_CONFIG_HOME with fallback to ~/.config
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
CONFIG_FILE = _xdg_config_home / "niribar" / "config.toml"
CONFIG_SECTION = "niribar"

NIRI_SOCKET_ENV = "NIRI_SOCKET"

# niri IPC request switching the connection to event streaming
EVENT_STREAM_REQUEST = '"EventStream"\n'

DEFAULT_CONNECT_RETRIES = 10
CONNECT_RETRY_DELAY = 1.0

# niri sends full snapshots (WindowsChanged...) as a single line
STREAM_LIMIT = 64 * 1024 * 1024
