"""Unit tests for the reactive camera state container."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from ringcam.services.camera_state import CameraState
from tests.helpers import make_camera_data


class TestCameraState:
    def test_seeded_with_initial_record(self):
        initial = make_camera_data()
        state = CameraState(initial)
        assert state.current is initial

    def test_current_is_always_the_latest_record(self):
        state = CameraState(make_camera_data())
        records = [make_camera_data(description=f"rev {i}") for i in range(5)]
        for record in records:
            state.update(record)
            assert state.current is record

    def test_late_subscriber_sees_latest_record(self):
        state = CameraState(make_camera_data())
        latest = make_camera_data(description="Porch")
        state.update(latest)
        received = []
        state.on_data.subscribe(received.append)
        assert received == [latest]

    def test_battery_emits_once_per_distinct_value(self):
        state = CameraState(make_camera_data(battery_life=80))
        levels = []
        state.on_battery_level.subscribe(levels.append)

        for raw in ["80", 80.0, "75", 75, "abc", None, "60"]:
            state.update(make_camera_data(battery_life=raw))

        assert levels == [80, 75, None, 60]
        assert state.battery_level == 60

    def test_every_update_is_broadcast(self):
        state = CameraState(make_camera_data())
        received = []
        state.on_data.subscribe(received.append)
        same = make_camera_data()
        state.update(same)
        state.update(same)
        assert len(received) == 3

    def test_request_update_signal(self):
        state = CameraState(make_camera_data())
        signals = []
        state.on_request_update.subscribe(signals.append)
        state.request_update()
        assert signals == [None]
