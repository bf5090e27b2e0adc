import json
import random
from dataclasses import replace

import pytest

from niribar.events import WindowOpenedOrChanged, WindowsChanged, WorkspaceActivated, WorkspacesChanged
from niribar.models import ReferentialIntegrityError, Window, Workspace
from niribar.projector import dumps, project
from niribar.reconciler import Reconciler, State


def test_scenario_single_window(test_logger):
    rec = Reconciler(log=test_logger)
    rec.apply(WorkspacesChanged((Workspace(id=1, idx=0, name=None, output="eDP-1", is_active=False, is_focused=False),)))
    rec.apply(WorkspaceActivated(1, True))
    rec.apply(WindowsChanged(()))
    rec.apply(WindowOpenedOrChanged(Window(id=10, workspace_id=1, is_floating=False, is_focused=True, title="term")))

    assert project(rec.state) == {
        "eDP-1": [
            {
                "id": 1,
                "index": 0,
                "name": None,
                "is_active": True,
                "windows": [{"id": 10, "is_focused": True, "title": "term"}],
            }
        ]
    }


def test_groups_by_output(state):
    tree = project(state)
    assert list(tree) == ["HDMI-A-1", "eDP-1"]
    assert [ws["id"] for ws in tree["eDP-1"]] == [1, 2]
    assert [ws["id"] for ws in tree["HDMI-A-1"]] == [3, 4]
    assert tree["eDP-1"][0]["windows"] == [
        {"id": 10, "is_focused": True, "title": "term"},
        {"id": 11, "is_focused": False, "title": "editor"},
    ]
    assert tree["eDP-1"][1]["name"] == "web"


def test_floating_windows_are_excluded(state):
    tree = project(state)
    hdmi = {ws["id"]: ws for ws in tree["HDMI-A-1"]}
    assert hdmi[3]["windows"] == []
    all_ids = [win["id"] for workspaces in tree.values() for ws in workspaces for win in ws["windows"]]
    assert 30 not in all_ids


def test_floating_window_with_dangling_reference_is_ignored(state):
    state.windows.append(Window(id=99, workspace_id=1234, is_floating=True))
    project(state, strict=True)


def test_windows_without_workspace_are_excluded(state):
    state.windows.append(Window(id=5, title="orphan"))
    tree = project(state, strict=True)
    all_ids = [win["id"] for workspaces in tree.values() for ws in workspaces for win in ws["windows"]]
    assert 5 not in all_ids


def test_workspaces_without_output_are_excluded(state):
    state.workspaces.append(Workspace(id=9, idx=3))
    tree = project(state)
    assert 9 not in [ws["id"] for workspaces in tree.values() for ws in workspaces]


def test_dangling_reference_is_fatal_when_consistent(state):
    state.windows.append(Window(id=77, workspace_id=1234))
    with pytest.raises(ReferentialIntegrityError) as excinfo:
        project(state)
    assert excinfo.value.ident == 1234
    assert excinfo.value.operation == "project"


def test_window_on_unplaced_workspace_is_dangling(state):
    state.workspaces.append(Workspace(id=9, idx=3))
    state.windows.append(Window(id=77, workspace_id=9))
    with pytest.raises(ReferentialIntegrityError):
        project(state)


def test_dangling_reference_is_dropped_before_sync(test_logger):
    state = State(windows=[Window(id=1, workspace_id=4)], windows_known=True)
    assert project(state, log=test_logger) == {}


def test_strict_flag_overrides_sync_state(state, test_logger):
    state.windows.append(Window(id=77, workspace_id=1234))
    tree = project(state, strict=False, log=test_logger)
    assert [ws["id"] for ws in tree["eDP-1"]] == [1, 2]

    unsynced = State(windows=[Window(id=1, workspace_id=4)])
    with pytest.raises(ReferentialIntegrityError):
        project(unsynced, strict=True)


def test_projection_is_deterministic(state):
    shuffled = State(
        workspaces=[replace(ws) for ws in state.workspaces],
        windows=[replace(win) for win in state.windows],
        workspaces_known=True,
        windows_known=True,
    )
    random.Random(4).shuffle(shuffled.workspaces)
    random.Random(2).shuffle(shuffled.windows)

    first = dumps(project(state))
    assert dumps(project(state)) == first
    assert dumps(project(shuffled)) == first


def test_projection_does_not_alias(state):
    first = project(state)
    first["eDP-1"][0]["windows"].clear()
    first["eDP-1"][0]["is_active"] = False
    second = project(state)
    assert len(second["eDP-1"][0]["windows"]) == 2
    assert second["eDP-1"][0]["is_active"] is True


def test_project_does_not_mutate_state(state):
    before = repr(state)
    project(state)
    assert repr(state) == before


def test_dumps_compact_and_key_order(state):
    text = dumps(project(state))
    assert "\n" not in text
    assert text.startswith('{"HDMI-A-1":[{"id":3,"index":1,"name":null,"is_active":true,"windows":[]}')
    assert json.loads(text) == project(state)


def test_dumps_pretty():
    text = dumps({"DP-1": []}, indent=2)
    assert text == '{\n  "DP-1": []\n}'


def test_dumps_keeps_unicode():
    tree = {"DP-1": [{"id": 1, "index": 1, "name": "café", "is_active": True, "windows": []}]}
    assert "café" in dumps(tree)
