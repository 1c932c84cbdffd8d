"""Shared builders and fakes for the unit tests."""

from ringcam.schemas.camera import CameraData
from ringcam.schemas.ding import ActiveDing


def make_camera_data(**overrides):
    fields = {"id": 1, "kind": "stickup_cam_v3", "description": "Driveway"}
    fields.update(overrides)
    return CameraData(**fields)


def make_ding(kind="ding", motion=False, ding_id=100, doorbot_id=1):
    return ActiveDing(id=ding_id, kind=kind, motion=motion, doorbot_id=doorbot_id)


def timestamps_response(capture, response):
    return {"timestamps": [{"doorbot_id": 1, "timestamp": capture}], "responseTimestamp": response}


class FakeClock:
    """Stands in for loop.call_later; timers fire only when advance() passes them."""

    def __init__(self):
        self.now = 0.0
        self._timers = []

    def schedule(self, delay, callback):
        self._timers.append((self.now + delay, callback))

    @property
    def pending(self):
        return len(self._timers)

    def advance(self, seconds):
        self.now += seconds
        due = sorted((t for t in self._timers if t[0] <= self.now), key=lambda t: t[0])
        self._timers = [t for t in self._timers if t[0] > self.now]
        for _, callback in due:
            callback()
