"""Configuration file loading.

Reads the TOML configuration file and wraps its `[niribar]` section in a
validated `Configuration`.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import aiofiles
import aiofiles.os

from .config import Configuration
from .constants import CONFIG_FILE, CONFIG_SECTION
from .models import NiribarError
from .schema import NIRIBAR_CONFIG_SCHEMA
from .validation import ConfigValidator

if TYPE_CHECKING:
    import logging

__all__ = ["ConfigLoader"]


class ConfigLoader:
    """Handles loading and validating the configuration file.

    The default file is optional: niribar runs with the schema defaults when
    it doesn't exist. A file given explicitly must exist.
    """

    def __init__(self, log: logging.Logger) -> None:
        """Initialize the config loader.

        Args:
            log: Logger instance for status and error messages
        """
        self.log = log
        self.errors: list[str] = []

    async def load(self, config_filename: str = "") -> Configuration:
        """Load the configuration.

        Args:
            config_filename: Optional path to the config file.
                           If empty, uses default CONFIG_FILE location.

        Raises:
            NiribarError: If an explicit config file is missing or the file has syntax errors.
        """
        if config_filename:
            fname = Path(os.path.expandvars(config_filename)).expanduser()
            if not await aiofiles.os.path.exists(fname):
                self.log.critical("Config file not found: %s", fname)
                raise NiribarError(f"Config file not found: {fname}")
            raw = await self._load_config_file(fname)
        elif await aiofiles.os.path.exists(CONFIG_FILE):
            raw = await self._load_config_file(CONFIG_FILE)
        else:
            self.log.info("No config file at %s, using defaults", CONFIG_FILE)
            raw = {}

        section = raw.get(CONFIG_SECTION, {})
        if not isinstance(section, dict):
            self.log.critical("[%s] must be a table", CONFIG_SECTION)
            raise NiribarError(f"[{CONFIG_SECTION}] must be a table")

        validator = ConfigValidator(section, CONFIG_SECTION, self.log)
        self.errors = validator.validate(NIRIBAR_CONFIG_SCHEMA)
        for error in self.errors:
            self.log.error(error)
        validator.warn_unknown_keys(NIRIBAR_CONFIG_SCHEMA)

        return Configuration(section, logger=self.log, schema=NIRIBAR_CONFIG_SCHEMA)

    async def _load_config_file(self, fname: Path) -> dict[str, Any]:
        """Read and parse a TOML file.

        Args:
            fname: Path to the configuration file

        Raises:
            NiribarError: If the file has syntax errors
        """
        self.log.info("Loading %s", fname)
        async with aiofiles.open(fname, encoding="utf-8") as f:
            content = await f.read()
        try:
            return tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            self.log.critical("Problem reading %s: %s", fname, e)
            raise NiribarError(f"Problem reading {fname}: {e}") from e
