"""Type definitions and data models for Niribar.

Provides the flat model mirrored from niri:
- Workspace: one compositor workspace
- Window: one managed window

The display-ready projection types:
- ProjectedWindow / ProjectedWorkspace TypedDicts
- ProjectedTree: output name -> ordered workspace summaries

Also includes:
- ExitCode: Standard CLI exit codes
- NiribarError and its subclasses
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import TypedDict

__all__ = [
    "EventDecodeError",
    "ExitCode",
    "NiribarError",
    "ProjectedTree",
    "ProjectedWindow",
    "ProjectedWorkspace",
    "ReferentialIntegrityError",
    "Window",
    "Workspace",
]


@dataclass
class Workspace:  # pylint: disable=too-many-instance-attributes
    """Workspace as reported by niri."""

    id: int
    idx: int = 0
    name: str | None = None
    output: str | None = None  # output name, None when not placed
    is_active: bool = False  # shown on its output
    is_focused: bool = False  # globally focused
    active_window_id: int | None = None
    is_urgent: bool = False


@dataclass
class Window:
    """Window as reported by niri."""

    id: int
    title: str | None = None
    app_id: str | None = None
    pid: int | None = None
    workspace_id: int | None = None
    is_focused: bool = False
    is_floating: bool = False
    is_urgent: bool = False


class ProjectedWindow(TypedDict):
    """Window summary in the projected tree."""

    id: int
    is_focused: bool
    title: str | None


class ProjectedWorkspace(TypedDict):
    """Workspace summary in the projected tree."""

    id: int
    index: int
    name: str | None
    is_active: bool
    windows: list[ProjectedWindow]


ProjectedTree = dict[str, list[ProjectedWorkspace]]


class NiribarError(Exception):
    """Used for errors which already triggered logging or are reported to the user."""


class ReferentialIntegrityError(NiribarError):
    """An identifier that must exist could not be resolved.

    Raised when the compositor contract is broken, continuing would display a corrupted state.
    """

    def __init__(self, operation: str, kind: str, ident: int) -> None:
        self.operation = operation
        self.kind = kind
        self.ident = ident
        super().__init__(f"{operation}: unknown {kind} id {ident}")


class EventDecodeError(NiribarError):
    """A known event carries a payload that can't be decoded."""


class ExitCode(IntEnum):
    """Standard exit codes for niribar."""

    SUCCESS = 0
    USAGE_ERROR = 1  # Invalid arguments or configuration
    ENV_ERROR = 2  # No niri socket available
    CONNECTION_ERROR = 3  # Cannot connect to niri
    INTEGRITY_ERROR = 4  # Compositor state became inconsistent
