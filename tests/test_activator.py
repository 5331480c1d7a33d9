"""Unit tests for applying an output selection."""

import pytest

from niri_single_output.activator import activate, plan_commands
from niri_single_output.errors import StateIOError, TransportError
from niri_single_output.models import OutputAction
from niri_single_output.selector import advance_to_next
from tests.mocks.niri_provider import FailingStateStore, RecordingProvider, make_snapshot


class TestActivate:
    def test_exactly_one_output_switched_on(self, provider, state_store, snapshot_abc):
        activate(provider, state_store, snapshot_abc, "C")

        assert provider.actions_for(OutputAction.ON) == ["C"]
        assert sorted(provider.actions_for(OutputAction.OFF)) == ["A", "B"]
        assert len(provider.sent) == len(snapshot_abc)

    def test_persists_chosen_output(self, provider, state_store, snapshot_abc):
        activate(provider, state_store, snapshot_abc, "A")
        assert state_store.read() == "A"

    def test_returns_sent_commands(self, provider, state_store, snapshot_abc):
        commands = activate(provider, state_store, snapshot_abc, "B")
        assert [(c.target_name, c.desired_state) for c in commands] == provider.sent

    def test_single_output(self, state_store):
        snapshot = make_snapshot({"eDP-1": False})
        provider = RecordingProvider(snapshot=snapshot)

        activate(provider, state_store, snapshot, "eDP-1")

        assert provider.sent == [("eDP-1", OutputAction.ON)]

    def test_unknown_output_sends_nothing(self, provider, state_store, snapshot_abc):
        with pytest.raises(ValueError):
            activate(provider, state_store, snapshot_abc, "Z")

        assert provider.sent == []
        assert state_store.read() is None

    def test_command_failure_aborts_without_saving(self, state_store, snapshot_abc):
        """First failing command stops the run and the state file is untouched."""
        provider = RecordingProvider(snapshot=snapshot_abc, fail_on="B")

        with pytest.raises(TransportError):
            activate(provider, state_store, snapshot_abc, "C")

        # Commands are sent in name order, so only A went out before B failed
        assert provider.sent == [("A", OutputAction.OFF)]
        assert state_store.read() is None

    def test_state_write_failure_keeps_sent_commands(self, snapshot_abc, state_file):
        """Commands already applied stay applied when saving state fails."""
        provider = RecordingProvider(snapshot=snapshot_abc)
        store = FailingStateStore(state_file)

        with pytest.raises(StateIOError):
            activate(provider, store, snapshot_abc, "C")

        assert provider.actions_for(OutputAction.ON) == ["C"]
        assert sorted(provider.actions_for(OutputAction.OFF)) == ["A", "B"]

    def test_next_then_activate(self, provider, state_store, snapshot_abc):
        chosen = advance_to_next(snapshot_abc)
        activate(provider, state_store, snapshot_abc, chosen)

        assert chosen == "C"
        assert provider.actions_for(OutputAction.ON) == ["C"]
        assert state_store.read() == "C"


class TestPlanCommands:
    def test_one_command_per_output_in_name_order(self):
        snapshot = make_snapshot({"eDP-1": True, "DP-1": False, "HDMI-A-1": False})
        commands = plan_commands(snapshot, "HDMI-A-1")

        assert [(c.target_name, c.desired_state) for c in commands] == [
            ("DP-1", OutputAction.OFF),
            ("HDMI-A-1", OutputAction.ON),
            ("eDP-1", OutputAction.OFF),
        ]
