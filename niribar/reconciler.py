"""Flat model of the compositor, kept in sync with the event stream.

`Reconciler.apply` mutates the `State` it owns to reflect one event, while
keeping the invariants niri guarantees:

- at most one focused workspace and one focused window globally
- at most one active workspace per output
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from .events import (
    Event,
    KeyboardLayoutsChanged,
    KeyboardLayoutSwitched,
    WindowClosed,
    WindowFocusChanged,
    WindowOpenedOrChanged,
    WindowsChanged,
    WorkspaceActivated,
    WorkspaceActiveWindowChanged,
    WorkspacesChanged,
)
from .logging_setup import get_logger
from .models import ReferentialIntegrityError, Window, Workspace

if TYPE_CHECKING:
    from logging import Logger

__all__ = ["Reconciler", "State"]


@dataclass
class State:
    """Workspaces and windows as last reported by niri."""

    workspaces: list[Workspace] = field(default_factory=list)
    windows: list[Window] = field(default_factory=list)
    workspaces_known: bool = False  # a full workspace list was received
    windows_known: bool = False  # a full window list was received

    @property
    def is_consistent(self) -> bool:
        """Return True once both full lists have been received."""
        return self.workspaces_known and self.windows_known

    def find_workspace(self, workspace_id: int) -> Workspace | None:
        """Return the workspace with the given id, if any."""
        return next((ws for ws in self.workspaces if ws.id == workspace_id), None)

    def find_window(self, window_id: int) -> Window | None:
        """Return the window with the given id, if any."""
        return next((win for win in self.windows if win.id == window_id), None)

    def focused_workspace(self) -> Workspace | None:
        """Return the focused workspace, if any."""
        return next((ws for ws in self.workspaces if ws.is_focused), None)

    def focused_window(self) -> Window | None:
        """Return the focused window, if any."""
        return next((win for win in self.windows if win.is_focused), None)


class Reconciler:
    """Applies niri events to a `State`."""

    def __init__(self, state: State | None = None, log: Logger | None = None) -> None:
        self.state = State() if state is None else state
        self.log = log or get_logger("reconciler")

    def apply(self, event: Event) -> None:
        """Update the state with one event.

        Args:
            event: the event to apply

        Raises:
            ReferentialIntegrityError: if a workspace activation names an unknown workspace
        """
        match event:
            case WorkspacesChanged(workspaces=workspaces):
                self.state.workspaces = [replace(ws) for ws in workspaces]
                self.state.workspaces_known = True
            case WorkspaceActivated(id=workspace_id, focused=focused):
                self._activate_workspace(workspace_id, focused)
            case WorkspaceActiveWindowChanged(workspace_id=workspace_id, active_window_id=window_id):
                workspace = self.state.find_workspace(workspace_id)
                if workspace is None:
                    self.log.debug("Active window changed on unknown workspace %s", workspace_id)
                else:
                    workspace.active_window_id = window_id
            case WindowsChanged(windows=windows):
                self.state.windows = [replace(win) for win in windows]
                self.state.windows_known = True
            case WindowOpenedOrChanged(window=window):
                self._upsert_window(replace(window))
            case WindowClosed(id=window_id):
                self.state.windows = [win for win in self.state.windows if win.id != window_id]
            case WindowFocusChanged(id=window_id):
                self._focus_window(window_id)
            case KeyboardLayoutsChanged() | KeyboardLayoutSwitched():
                pass
            case _:
                self.log.debug("Unhandled event: %s", event)

    def _activate_workspace(self, workspace_id: int, focused: bool) -> None:
        """Make a workspace the active one on its output."""
        if focused:
            for ws in self.state.workspaces:
                ws.is_focused = False

        workspace = self.state.find_workspace(workspace_id)
        if workspace is None:
            raise ReferentialIntegrityError("WorkspaceActivated", "workspace", workspace_id)
        workspace.is_active = True
        workspace.is_focused = focused

        if workspace.output is not None:
            for ws in self.state.workspaces:
                if ws.id != workspace_id and ws.output == workspace.output:
                    ws.is_active = False

    def _upsert_window(self, window: Window) -> None:
        """Replace the window with the same id, or append it."""
        if window.is_focused:
            for win in self.state.windows:
                win.is_focused = False

        for i, win in enumerate(self.state.windows):
            if win.id == window.id:
                self.state.windows[i] = window
                return
        self.state.windows.append(window)

    def _focus_window(self, window_id: int | None) -> None:
        """Move the focus to the given window, or to none."""
        for win in self.state.windows:
            win.is_focused = False
        if window_id is None:
            return
        window = self.state.find_window(window_id)
        if window is None:
            self.log.debug("Focus changed to unknown window %s", window_id)
        else:
            window.is_focused = True
