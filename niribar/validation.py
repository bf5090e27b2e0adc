"""Schema checks for the configuration file.

A schema is a `ConfigItems` list of `ConfigField`. The validator reports
wrongly typed values, values outside `choices`, and keys that are not in
the schema (with a suggestion when it looks like a typo).
"""

import difflib
import logging
from dataclasses import dataclass
from typing import Any

from .config import BOOL_STRINGS

__all__ = [
    "ConfigField",
    "ConfigItems",
    "ConfigValidator",
    "format_config_error",
]


@dataclass
class ConfigField:
    """One expected key of a config section."""

    name: str
    field_type: type = str
    default: Any = None
    description: str = ""
    choices: list | None = None


class ConfigItems(list):
    """The fields of a config section."""

    def __init__(self, *fields: ConfigField) -> None:
        super().__init__(fields)

    def get(self, name: str) -> ConfigField | None:
        for item in self:
            if item.name == name:
                return item
        return None


def _find_similar_key(unknown_key: str, known_keys: list[str]) -> str | None:
    matches = difflib.get_close_matches(unknown_key, known_keys, n=1)
    return matches[0] if matches else None


def format_config_error(section: str, field: str, message: str, suggestion: str = "") -> str:
    """Build the message reported for a bad value.

    Args:
        section: config section name
        field: key holding the bad value
        message: what is wrong
        suggestion: how to fix it, if known
    """
    text = f"[{section}] Config error for '{field}': {message}"
    return f"{text} -> {suggestion}" if suggestion else text


def _is_int(value: Any) -> bool:  # noqa: ANN401
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    try:
        int(value)
    except (TypeError, ValueError):
        return False
    return True


_TYPE_CHECKS = {
    bool: (lambda v: isinstance(v, bool) or (isinstance(v, str) and v.lower() in BOOL_STRINGS), "Use true/false (without quotes)"),
    int: (_is_int, "Use {name} = 42 (without quotes)"),
    str: (lambda v: isinstance(v, str), 'Use {name} = "value"'),
}


class ConfigValidator:
    """Checks one config section against its schema."""

    def __init__(self, config: dict, section: str, logger: logging.Logger) -> None:
        self.config = config
        self.section = section
        self.log = logger

    def validate(self, schema: ConfigItems) -> list[str]:
        """Return the errors found in the section (empty when valid)."""
        errors = []
        for item in schema:
            value = self.config.get(item.name)
            if value is None:
                continue
            check = _TYPE_CHECKS.get(item.field_type)
            if check and not check[0](value):
                message = f"Expected {item.field_type.__name__}, got {type(value).__name__}"
                errors.append(format_config_error(self.section, item.name, message, check[1].format(name=item.name)))
            elif item.choices is not None and value not in item.choices:
                options = ", ".join(repr(choice) for choice in item.choices)
                errors.append(format_config_error(self.section, item.name, f"Invalid value {value!r}", f"Valid options: {options}"))
        return errors

    def warn_unknown_keys(self, schema: ConfigItems) -> list[str]:
        """Log a warning for every key the schema doesn't know, and return them."""
        known = [item.name for item in schema]
        warnings = []
        for key in self.config:
            if key in known:
                continue
            similar = _find_similar_key(key, known)
            if similar:
                msg = f"[{self.section}] Unknown option '{key}' (did you mean '{similar}'?)"
            else:
                msg = f"[{self.section}] Unknown option '{key}' - will be ignored"
            self.log.warning(msg)
            warnings.append(msg)
        return warnings
