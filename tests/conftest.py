"""Pytest configuration and fixtures for niri-single-output tests."""

from typing import Generator

import pytest

from niri_single_output.models import OutputSnapshot
from niri_single_output.state_store import StateStore
from tests.mocks.niri_provider import RecordingProvider, make_snapshot
from tests.mocks.niri_server import FakeNiriServer, niri_handler


@pytest.fixture
def snapshot_abc() -> OutputSnapshot:
    """Three outputs, B active."""
    return make_snapshot({"C": False, "A": False, "B": True})


@pytest.fixture
def state_file(tmp_path):
    """State file path inside a not-yet-existing directory."""
    return tmp_path / "state" / "niri" / "last-output"


@pytest.fixture
def state_store(state_file) -> StateStore:
    return StateStore(state_file)


@pytest.fixture
def provider(snapshot_abc) -> RecordingProvider:
    return RecordingProvider(snapshot=snapshot_abc)


@pytest.fixture
def niri_server() -> Generator[FakeNiriServer, None, None]:
    """Fake niri with eDP-1 active and HDMI-A-1 idle."""
    server = FakeNiriServer(niri_handler({"eDP-1": True, "HDMI-A-1": False})).start()
    try:
        yield server
    finally:
        server.stop()
