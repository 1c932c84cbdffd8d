# ringcam/schemas/camera.py
"""
Raw camera / doorbell device record as returned by the Ring API.
Unknown fields are kept so a record can be replaced wholesale without loss.
"""

from pydantic import BaseModel
from typing import Optional, Union


MODEL_NAMES = {
    "doorbot": "Doorbell",
    "doorbell": "Doorbell",
    "doorbell_v3": "Doorbell",
    "doorbell_v4": "Doorbell 2",
    "doorbell_v5": "Doorbell 2",
    "doorbell_portal": "Door View Cam",
    "doorbell_scallop": "Doorbell 3 Plus",
    "doorbell_scallop_lite": "Doorbell 3",
    "lpd_v1": "Doorbell Pro",
    "lpd_v2": "Doorbell Pro",
    "jbox_v1": "Doorbell Elite",
    "stickup_cam": "Original Stick Up Cam",
    "stickup_cam_v3": "Stick Up Cam",
    "stickup_cam_elite": "Stick Up Cam Wired",
    "stickup_cam_wired": "Stick Up Cam Wired",
    "stickup_cam_lunar": "Stick Up Cam Battery",
    "spotlightw_v2": "Spotlight Cam Wired",
    "hp_cam_v1": "Floodlight Cam",
    "hp_cam_v2": "Spotlight Cam Wired",
    "floodlight_v2": "Floodlight Cam",
    "cocoa_camera": "Stick Up Cam",
}


class SirenStatus(BaseModel):
    seconds_remaining: int = 0

    class Config:
        extra = "allow"


class CameraData(BaseModel):
    id: int
    kind: str
    description: str = ""
    device_id: Optional[str] = None
    firmware_version: Optional[str] = None
    led_status: Optional[str] = None            # on | off, only sent for devices with a light
    siren_status: Optional[SirenStatus] = None  # only sent for devices with a siren
    battery_life: Optional[Union[int, float, str]] = None   # number or numeric string

    class Config:
        extra = "allow"

    def carries(self, field: str) -> bool:
        """True when the raw record included the field, even as null."""
        return field in self.model_fields_set
