"""Tests for data models."""

import dataclasses

import pytest

from yelix_cloud.models import InstanceState, InstanceStatus, RequestEvent


class TestRequestEvent:
    """Tests for RequestEvent model."""

    def test_create_event(self):
        """Test creating a RequestEvent."""
        event = RequestEvent(start_time=1000, path="/x", duration=12.5, method="GET")
        assert event.start_time == 1000
        assert event.path == "/x"
        assert event.duration == 12.5
        assert event.method == "GET"

    def test_negative_duration_rejected(self):
        """Test that a negative duration raises."""
        with pytest.raises(ValueError):
            RequestEvent(start_time=1000, path="/x", duration=-1.0, method="GET")

    @pytest.mark.parametrize("duration", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_duration_rejected(self, duration):
        """Test that NaN and infinite durations raise."""
        with pytest.raises(ValueError):
            RequestEvent(start_time=1000, path="/x", duration=duration, method="GET")

    @pytest.mark.parametrize("start_time", [float("nan"), float("inf")])
    def test_non_finite_start_time_rejected(self, start_time):
        """Test that a non-finite start time raises."""
        with pytest.raises(ValueError):
            RequestEvent(start_time=start_time, path="/x", duration=1.0, method="GET")

    def test_zero_duration_allowed(self):
        """Test the boundary value."""
        assert RequestEvent(start_time=0, path="/", duration=0.0, method="HEAD").duration == 0.0

    def test_event_is_immutable(self):
        """Test that events are frozen value objects."""
        event = RequestEvent(start_time=1000, path="/x", duration=1.0, method="GET")
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.path = "/y"

    def test_value_equality(self):
        """Test that equal fields mean equal events."""
        a = RequestEvent(start_time=1, path="/x", duration=1.0, method="GET")
        b = RequestEvent(start_time=1, path="/x", duration=1.0, method="GET")
        assert a == b

    def test_to_payload_uses_collector_keys(self):
        """Test collector field names."""
        event = RequestEvent(start_time=1000, path="/x", duration=12.5, method="GET")
        assert event.to_payload() == {
            "startTime": 1000,
            "path": "/x",
            "duration": 12.5,
            "method": "GET",
        }


class TestInstanceState:
    """Tests for InstanceState model."""

    def test_ready_carries_instance_id(self):
        """Test READY state."""
        state = InstanceState.ready("abc123")
        assert state.status is InstanceStatus.READY
        assert state.instance_id == "abc123"
        assert state.is_terminal

    def test_non_ready_states_have_no_id(self):
        """Test that only READY has an instance id."""
        for state in (
            InstanceState.uninitialized(),
            InstanceState.initializing(),
            InstanceState.failed(),
        ):
            assert state.instance_id is None

    def test_terminal_states(self):
        """Test which states are terminal."""
        assert not InstanceState.uninitialized().is_terminal
        assert not InstanceState.initializing().is_terminal
        assert InstanceState.failed().is_terminal

    def test_status_values(self):
        """Test InstanceStatus string values."""
        assert InstanceStatus.UNINITIALIZED.value == "uninitialized"
        assert InstanceStatus.FAILED == "failed"
