# ringcam/services/camera_registry.py
"""
In-memory registry of RingCamera objects keyed by device id.
Raw records and dings are handed in from outside; nothing here polls or discovers.
"""

from typing import Optional

from ringcam.schemas.camera import CameraData
from ringcam.schemas.ding import ActiveDing
from ringcam.services.camera import RingCamera
from ringcam.services.rest_client import RestClient
from ringcam.utils.logger import get_logger

logger = get_logger(__name__)


class UnknownCameraError(KeyError):
    pass


class CameraRegistry:
    def __init__(self, rest_client: RestClient):
        self.rest_client = rest_client
        self._cameras: dict[int, RingCamera] = {}

    def __len__(self):
        return len(self._cameras)

    def all(self) -> list[RingCamera]:
        return list(self._cameras.values())

    def find(self, device_id: int) -> Optional[RingCamera]:
        return self._cameras.get(device_id)

    def get(self, device_id: int) -> RingCamera:
        camera = self._cameras.get(device_id)
        if camera is None:
            raise UnknownCameraError(device_id)
        return camera

    def upsert(self, data: CameraData, is_doorbot: bool = False) -> RingCamera:
        """Create the camera on first sight, otherwise replace its record."""
        camera = self._cameras.get(data.id)
        if camera is None:
            camera = RingCamera(data, is_doorbot, self.rest_client)
            self._cameras[data.id] = camera
            logger.info(f"📷 Registered {camera.model} {data.id} ({data.description or data.kind})")
        else:
            camera.update_data(data)
        return camera

    def process_ding(self, ding: ActiveDing) -> RingCamera:
        camera = self.get(ding.doorbot_id)
        camera.process_active_ding(ding)
        return camera


_registry: Optional[CameraRegistry] = None


def init_registry(rest_client: RestClient) -> CameraRegistry:
    """Create the application-wide registry. Called once at startup."""
    global _registry
    _registry = CameraRegistry(rest_client)
    return _registry


def get_registry() -> CameraRegistry:
    """FastAPI dependency — the registry created at startup."""
    if _registry is None:
        raise RuntimeError("Camera registry not initialised")
    return _registry
