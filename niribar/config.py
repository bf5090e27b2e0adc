"""The `[niribar]` configuration section."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import logging

    from .validation import ConfigItems

__all__ = ["BOOL_STRINGS", "Configuration", "coerce_to_bool"]

_TRUTHY = {"true", "yes", "on", "1", "enabled"}
_FALSY = {"false", "no", "off", "0", "disabled"}
BOOL_STRINGS = frozenset(_TRUTHY | _FALSY)


def coerce_to_bool(value: Any, default: bool = False) -> bool:  # noqa: ANN401
    """Read `value` as a boolean.

    Strings are accepted the way they are usually written in TOML by hand:
    "no", "off", "0"... are false, blank is false, any other text is true.
    `None` gives `default`.
    """
    if value is None:
        return default
    if not isinstance(value, str):
        return bool(value)
    text = value.strip().lower()
    return bool(text) and text not in _FALSY


class Configuration(dict):
    """Settings read from the config file and the command line.

    Keys missing from both fall back to the schema defaults, without being
    stored in the mapping itself.
    """

    def __init__(self, *args: Any, logger: logging.Logger, schema: ConfigItems | None = None, **kwargs: Any):  # noqa: ANN401
        super().__init__(*args, **kwargs)
        self.log = logger
        self.defaults: dict[str, Any] = {}
        if schema:
            self.set_schema(schema)

    def set_schema(self, schema: ConfigItems) -> None:
        """Use the defaults of `schema` for missing keys."""
        self.defaults = {item.name: item.default for item in schema if item.default is not None}

    def get(self, name: str, default: Any = None) -> Any:  # type: ignore[override]  # noqa: ANN401
        if name in self:
            return self[name]
        return self.defaults.get(name, default)

    def get_bool(self, name: str, default: bool = False) -> bool:
        return coerce_to_bool(self.get(name), default)

    def get_int(self, name: str, default: int = 0) -> int:
        """Integer value of `name`, `default` if missing or not a number."""
        value = self.get(name)
        if value is None:
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            self.log.warning("%s should be an integer, got %r. Using %s", name, value, default)
            return default

    def get_str(self, name: str, default: str = "") -> str:
        value = self.get(name)
        return default if value is None else str(value)
