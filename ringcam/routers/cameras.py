# ringcam/routers/cameras.py
"""
Camera state and command endpoints.
PUT  /cameras            — hand in a raw device record (creates or updates)
POST /cameras/{id}/dings — hand in a raw ding record
Everything else reads cached state or forwards a command to the Ring API.
"""

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from ringcam.schemas.camera import CameraData
from ringcam.schemas.camera_out import CameraOut
from ringcam.schemas.ding import ActiveDing, CameraHealth, HistoricalDing
from ringcam.services.camera import RingCamera
from ringcam.services.camera_registry import CameraRegistry, get_registry
from ringcam.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


def _camera_or_404(device_id: int, registry: CameraRegistry) -> RingCamera:
    camera = registry.find(device_id)
    if camera is None:
        raise HTTPException(status_code=404, detail=f"Camera {device_id} not found")
    return camera


@router.get("/cameras", response_model=list[CameraOut], summary="List cameras")
async def list_cameras(registry: CameraRegistry = Depends(get_registry)):
    return [CameraOut.from_camera(c) for c in registry.all()]


@router.put("/cameras", response_model=CameraOut, summary="Create or update a camera from a raw record")
async def upsert_camera(body: CameraData, is_doorbot: bool = False,
                        registry: CameraRegistry = Depends(get_registry)):
    return CameraOut.from_camera(registry.upsert(body, is_doorbot))


@router.get("/cameras/{device_id}", response_model=CameraOut, summary="Cached camera state")
async def get_camera(device_id: int, registry: CameraRegistry = Depends(get_registry)):
    return CameraOut.from_camera(_camera_or_404(device_id, registry))


@router.post("/cameras/{device_id}/dings", summary="Hand in a live ding")
async def receive_ding(device_id: int, body: ActiveDing,
                       registry: CameraRegistry = Depends(get_registry)):
    _camera_or_404(device_id, registry)
    if body.doorbot_id != device_id:
        raise HTTPException(status_code=400, detail=f"Ding belongs to camera {body.doorbot_id}")
    camera = registry.process_ding(body)
    return {"status": "ok", "active_dings": len(camera.active_dings),
            "motion_detected": camera.is_motion_active}


@router.post("/cameras/{device_id}/request-update", summary="Ask the poller for a fresh record")
async def request_update(device_id: int, registry: CameraRegistry = Depends(get_registry)):
    _camera_or_404(device_id, registry).request_update()
    return {"status": "requested"}


@router.put("/cameras/{device_id}/light/{state}", summary="Turn the floodlight on or off")
async def set_light(device_id: int, state: Literal["on", "off"],
                    registry: CameraRegistry = Depends(get_registry)):
    supported = await _camera_or_404(device_id, registry).set_light(state == "on")
    return {"status": state if supported else "unsupported", "supported": supported}


@router.put("/cameras/{device_id}/siren/{state}", summary="Turn the siren on or off")
async def set_siren(device_id: int, state: Literal["on", "off"],
                    registry: CameraRegistry = Depends(get_registry)):
    supported = await _camera_or_404(device_id, registry).set_siren(state == "on")
    return {"status": state if supported else "unsupported", "supported": supported}


@router.get("/cameras/{device_id}/health", response_model=CameraHealth, summary="Device health")
async def get_health(device_id: int, registry: CameraRegistry = Depends(get_registry)):
    return await _camera_or_404(device_id, registry).get_health()


@router.get("/cameras/{device_id}/history", response_model=list[HistoricalDing], summary="Past dings")
async def get_history(device_id: int, limit: int = 10, favorites: bool = False,
                      registry: CameraRegistry = Depends(get_registry)):
    return await _camera_or_404(device_id, registry).get_history(limit, favorites)


@router.get("/cameras/{device_id}/recordings/{ding_id}", summary="Recording URL for a past ding")
async def get_recording(device_id: int, ding_id: str,
                        registry: CameraRegistry = Depends(get_registry)):
    url = await _camera_or_404(device_id, registry).get_recording(ding_id)
    return {"ding_id": ding_id, "url": url}


@router.get("/cameras/{device_id}/snapshot", summary="Current snapshot (JPEG)")
async def get_snapshot(device_id: int, allow_stale: bool = False,
                       registry: CameraRegistry = Depends(get_registry)):
    image = await _camera_or_404(device_id, registry).get_snapshot(allow_stale)
    return Response(content=image, media_type="image/jpeg")
