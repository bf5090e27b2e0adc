" generic fixtures "
import logging
from dataclasses import replace

import pytest

from niribar.models import Window, Workspace
from niribar.reconciler import Reconciler, State


def pytest_configure():
    "Runs once before all"
    from niribar.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True)


@pytest.fixture
def test_logger():
    "A logger for components taking one"
    return logging.getLogger("niribar-tests")


WORKSPACES = [
    Workspace(id=1, idx=1, name=None, output="eDP-1", is_active=True, is_focused=True, active_window_id=10),
    Workspace(id=2, idx=2, name="web", output="eDP-1"),
    Workspace(id=3, idx=1, name=None, output="HDMI-A-1", is_active=True),
    Workspace(id=4, idx=2, name="chat", output="HDMI-A-1"),
]

WINDOWS = [
    Window(id=10, title="term", app_id="foot", workspace_id=1, is_focused=True),
    Window(id=11, title="editor", app_id="nvim", workspace_id=1),
    Window(id=20, title="browser", app_id="firefox", workspace_id=2),
    Window(id=30, title="picture-in-picture", app_id="firefox", workspace_id=3, is_floating=True),
    Window(id=40, title="matrix", app_id="element", workspace_id=4),
]


@pytest.fixture
def state():
    "A self-consistent state with two outputs"
    return State(
        workspaces=[replace(ws) for ws in WORKSPACES],
        windows=[replace(win) for win in WINDOWS],
        workspaces_known=True,
        windows_known=True,
    )


@pytest.fixture
def reconciler(state, test_logger):
    "A reconciler owning the sample state"
    return Reconciler(state, log=test_logger)
