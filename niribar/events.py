"""Niri events.

niri writes one JSON object per line on the event stream, tagged by the
event name::

    {"WorkspaceActivated": {"id": 3, "focused": true}}

Every kind the reconciler cares about has its own frozen dataclass,
anything else is kept as an `UnknownEvent`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .models import EventDecodeError, Window, Workspace

if TYPE_CHECKING:
    from collections.abc import Callable
    from logging import Logger

__all__ = [
    "Event",
    "KeyboardLayoutSwitched",
    "KeyboardLayoutsChanged",
    "UnknownEvent",
    "WindowClosed",
    "WindowFocusChanged",
    "WindowOpenedOrChanged",
    "WindowsChanged",
    "WorkspaceActivated",
    "WorkspaceActiveWindowChanged",
    "WorkspacesChanged",
    "decode_window",
    "decode_workspace",
    "parse_event",
]


@dataclass(frozen=True)
class WorkspacesChanged:
    """The full workspace list was sent."""

    workspaces: tuple[Workspace, ...]


@dataclass(frozen=True)
class WorkspaceActivated:
    """A workspace became active on its output, and maybe focused."""

    id: int
    focused: bool


@dataclass(frozen=True)
class WorkspaceActiveWindowChanged:
    """The active window of a workspace changed."""

    workspace_id: int
    active_window_id: int | None


@dataclass(frozen=True)
class WindowsChanged:
    """The full window list was sent."""

    windows: tuple[Window, ...]


@dataclass(frozen=True)
class WindowOpenedOrChanged:
    """A window was opened or one of its properties changed."""

    window: Window


@dataclass(frozen=True)
class WindowClosed:
    """A window was closed."""

    id: int


@dataclass(frozen=True)
class WindowFocusChanged:
    """Focus moved to another window (or to none)."""

    id: int | None


@dataclass(frozen=True)
class KeyboardLayoutsChanged:
    """The configured keyboard layouts changed."""

    names: tuple[str, ...] = ()
    current_idx: int = 0


@dataclass(frozen=True)
class KeyboardLayoutSwitched:
    """The keyboard layout was switched."""

    idx: int


@dataclass(frozen=True)
class UnknownEvent:
    """Any event niribar does not model."""

    name: str
    payload: dict[str, Any] = field(default_factory=dict, compare=False)


Event = (
    WorkspacesChanged
    | WorkspaceActivated
    | WorkspaceActiveWindowChanged
    | WindowsChanged
    | WindowOpenedOrChanged
    | WindowClosed
    | WindowFocusChanged
    | KeyboardLayoutsChanged
    | KeyboardLayoutSwitched
    | UnknownEvent
)


# Field helpers {{{


def _require_int(data: dict[str, Any], key: str, where: str) -> int:
    value = data.get(key)
    if not isinstance(value, int) or isinstance(value, bool):
        msg = f"{where}: expected integer '{key}', got {value!r}"
        raise EventDecodeError(msg)
    return value


def _optional_int(data: dict[str, Any], key: str, where: str) -> int | None:
    if data.get(key) is None:
        return None
    return _require_int(data, key, where)


def _optional_str(data: dict[str, Any], key: str, where: str) -> str | None:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    msg = f"{where}: expected string '{key}', got {value!r}"
    raise EventDecodeError(msg)


def _flag(data: dict[str, Any], key: str) -> bool:
    return bool(data.get(key, False))


def _as_dict(value: Any, where: str) -> dict[str, Any]:  # noqa: ANN401
    if not isinstance(value, dict):
        msg = f"{where}: expected an object, got {type(value).__name__}"
        raise EventDecodeError(msg)
    return value


def _as_list(value: Any, where: str) -> list[Any]:  # noqa: ANN401
    if not isinstance(value, list):
        msg = f"{where}: expected a list, got {type(value).__name__}"
        raise EventDecodeError(msg)
    return value


# }}}


def decode_workspace(data: Any) -> Workspace:  # noqa: ANN401
    """Build a Workspace from niri's JSON representation.

    Args:
        data: the decoded JSON object

    Raises:
        EventDecodeError: if the object lacks an id or has wrongly typed fields
    """
    data = _as_dict(data, "workspace")
    return Workspace(
        id=_require_int(data, "id", "workspace"),
        idx=_optional_int(data, "idx", "workspace") or 0,
        name=_optional_str(data, "name", "workspace"),
        output=_optional_str(data, "output", "workspace"),
        is_active=_flag(data, "is_active"),
        is_focused=_flag(data, "is_focused"),
        active_window_id=_optional_int(data, "active_window_id", "workspace"),
        is_urgent=_flag(data, "is_urgent"),
    )


def decode_window(data: Any) -> Window:  # noqa: ANN401
    """Build a Window from niri's JSON representation.

    Args:
        data: the decoded JSON object

    Raises:
        EventDecodeError: if the object lacks an id or has wrongly typed fields
    """
    data = _as_dict(data, "window")
    return Window(
        id=_require_int(data, "id", "window"),
        title=_optional_str(data, "title", "window"),
        app_id=_optional_str(data, "app_id", "window"),
        pid=_optional_int(data, "pid", "window"),
        workspace_id=_optional_int(data, "workspace_id", "window"),
        is_focused=_flag(data, "is_focused"),
        is_floating=_flag(data, "is_floating"),
        is_urgent=_flag(data, "is_urgent"),
    )


def _workspaces_changed(data: dict[str, Any]) -> Event:
    items = _as_list(data.get("workspaces"), "WorkspacesChanged")
    return WorkspacesChanged(tuple(decode_workspace(item) for item in items))


def _workspace_activated(data: dict[str, Any]) -> Event:
    return WorkspaceActivated(_require_int(data, "id", "WorkspaceActivated"), _flag(data, "focused"))


def _workspace_active_window_changed(data: dict[str, Any]) -> Event:
    where = "WorkspaceActiveWindowChanged"
    return WorkspaceActiveWindowChanged(_require_int(data, "workspace_id", where), _optional_int(data, "active_window_id", where))


def _windows_changed(data: dict[str, Any]) -> Event:
    items = _as_list(data.get("windows"), "WindowsChanged")
    return WindowsChanged(tuple(decode_window(item) for item in items))


def _window_opened_or_changed(data: dict[str, Any]) -> Event:
    return WindowOpenedOrChanged(decode_window(data.get("window")))


def _window_closed(data: dict[str, Any]) -> Event:
    return WindowClosed(_require_int(data, "id", "WindowClosed"))


def _window_focus_changed(data: dict[str, Any]) -> Event:
    return WindowFocusChanged(_optional_int(data, "id", "WindowFocusChanged"))


def _keyboard_layouts_changed(data: dict[str, Any]) -> Event:
    layouts = _as_dict(data.get("keyboard_layouts") or {}, "KeyboardLayoutsChanged")
    return KeyboardLayoutsChanged(tuple(layouts.get("names", ())), layouts.get("current_idx", 0))


def _keyboard_layout_switched(data: dict[str, Any]) -> Event:
    return KeyboardLayoutSwitched(data.get("idx", 0))


DECODERS: dict[str, Callable[[dict[str, Any]], Event]] = {
    "WorkspacesChanged": _workspaces_changed,
    "WorkspaceActivated": _workspace_activated,
    "WorkspaceActiveWindowChanged": _workspace_active_window_changed,
    "WindowsChanged": _windows_changed,
    "WindowOpenedOrChanged": _window_opened_or_changed,
    "WindowClosed": _window_closed,
    "WindowFocusChanged": _window_focus_changed,
    "KeyboardLayoutsChanged": _keyboard_layouts_changed,
    "KeyboardLayoutSwitched": _keyboard_layout_switched,
}


def parse_event(raw_data: str, *, log: Logger) -> Event | None:
    """Parse a raw event line into an Event.

    Args:
        raw_data: one line of the niri event stream
        log: Logger to use for this operation

    Returns:
        The event, or None if the line doesn't hold an event

    Raises:
        EventDecodeError: if a known event has a malformed payload
    """
    if not raw_data.strip().startswith("{"):
        return None
    try:
        event = json.loads(raw_data)
    except json.JSONDecodeError:
        log.exception("Invalid JSON event: %s", raw_data)
        return None

    if len(event) != 1:
        log.warning("Unexpected event format: %s", raw_data.strip())
        return None

    name, data = next(iter(event.items()))
    decoder = DECODERS.get(name)
    if decoder is None:
        return UnknownEvent(name, data if isinstance(data, dict) else {})
    return decoder(_as_dict(data, name))
