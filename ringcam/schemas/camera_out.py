# ringcam/schemas/camera_out.py
from pydantic import BaseModel
from typing import Optional, Union

from ringcam.schemas.camera import CameraData
from ringcam.schemas.ding import ActiveDing


class CameraOut(BaseModel):
    id: int
    name: str
    model: str
    device_type: str
    is_doorbot: bool
    has_light: bool
    has_siren: bool
    battery_level: Optional[Union[int, float]]
    motion_detected: bool
    active_dings: list[ActiveDing]
    data: CameraData

    @classmethod
    def from_camera(cls, camera) -> "CameraOut":
        return cls(
            id=camera.id,
            name=camera.name,
            model=camera.model,
            device_type=camera.device_type,
            is_doorbot=camera.is_doorbot,
            has_light=camera.has_light,
            has_siren=camera.has_siren,
            battery_level=camera.battery_level,
            motion_detected=camera.is_motion_active,
            active_dings=camera.active_dings,
            data=camera.data,
        )
