"""Display-ready projection of the flat model.

Groups workspaces by output and windows by workspace::

    {
        "eDP-1": [
            {"id": 1, "index": 1, "name": null, "is_active": true,
             "windows": [{"id": 10, "is_focused": true, "title": "term"}]}
        ]
    }

Outputs are sorted by name, workspaces and windows by id. Workspaces without
an output and floating windows are left out.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from .logging_setup import get_logger
from .models import ProjectedTree, ProjectedWindow, ProjectedWorkspace, ReferentialIntegrityError

if TYPE_CHECKING:
    from logging import Logger

    from .reconciler import State

__all__ = ["dumps", "project"]


def project(state: State, *, strict: bool | None = None, log: Logger | None = None) -> ProjectedTree:
    """Build the output -> workspace -> window tree.

    Args:
        state: the flat model (read only)
        strict: raise on windows pointing to a workspace missing from the tree.
            None (default) means strict once the state is self-consistent
        log: Logger used to report dropped windows

    Raises:
        ReferentialIntegrityError: on a dangling window -> workspace reference in strict mode
    """
    if strict is None:
        strict = state.is_consistent

    outputs: dict[str, dict[int, ProjectedWorkspace]] = {}
    by_id: dict[int, ProjectedWorkspace] = {}
    for workspace in state.workspaces:
        if workspace.output is None:
            continue
        summary: ProjectedWorkspace = {
            "id": workspace.id,
            "index": workspace.idx,
            "name": workspace.name,
            "is_active": workspace.is_active,
            "windows": [],
        }
        outputs.setdefault(workspace.output, {})[workspace.id] = summary
        by_id[workspace.id] = summary

    placed: dict[int, dict[int, ProjectedWindow]] = {}
    for window in state.windows:
        if window.is_floating or window.workspace_id is None:
            continue
        if window.workspace_id not in by_id:
            if strict:
                raise ReferentialIntegrityError("project", "workspace", window.workspace_id)
            (log or get_logger("projector")).debug("Window %s: workspace %s not known yet, skipped", window.id, window.workspace_id)
            continue
        placed.setdefault(window.workspace_id, {})[window.id] = {
            "id": window.id,
            "is_focused": window.is_focused,
            "title": window.title,
        }

    for workspace_id, windows in placed.items():
        by_id[workspace_id]["windows"] = [windows[k] for k in sorted(windows)]

    return {name: [workspaces[k] for k in sorted(workspaces)] for name, workspaces in sorted(outputs.items())}


def dumps(tree: ProjectedTree, indent: int | None = None) -> str:
    """Serialize a projected tree to JSON.

    Args:
        tree: the projection
        indent: pretty print with this indentation, compact output if None
    """
    if indent is None:
        return json.dumps(tree, separators=(",", ":"), ensure_ascii=False)
    return json.dumps(tree, indent=indent, ensure_ascii=False)
