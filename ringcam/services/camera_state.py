# ringcam/services/camera_state.py
"""
Reactive state container for one camera.

Holds the latest raw CameraData and publishes it, plus values derived from it:
  on_data           — replay-latest, every update
  on_battery_level  — replay-latest, only when the parsed level changes
  on_request_update — plain signal asking an external poller for a fresh record

Records are replaced wholesale on every update, never mutated in place.
"""

from ringcam.schemas.camera import CameraData
from ringcam.services.battery import get_battery_level
from ringcam.utils.channels import Channel, ReplayChannel
from ringcam.utils.logger import get_logger

logger = get_logger(__name__)


class CameraState:
    def __init__(self, initial_data: CameraData):
        self.on_data = ReplayChannel(initial_data, name=f"data-{initial_data.id}")
        self.on_battery_level = ReplayChannel(
            get_battery_level(initial_data),
            name=f"battery-{initial_data.id}",
            distinct=True,
        )
        self.on_request_update = Channel(name=f"request-update-{initial_data.id}")

    @property
    def current(self) -> CameraData:
        return self.on_data.value

    @property
    def battery_level(self):
        return self.on_battery_level.value

    def update(self, data: CameraData):
        logger.debug(f"Camera {data.id} record updated")
        self.on_data.emit(data)
        self.on_battery_level.emit(get_battery_level(data))

    def request_update(self):
        self.on_request_update.emit()
