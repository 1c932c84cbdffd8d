# ringcam/routers/health.py
"""Liveness endpoint: backend status and number of known cameras."""

from datetime import datetime

from fastapi import APIRouter, Depends

from ringcam.services.camera_registry import CameraRegistry, get_registry

router = APIRouter()


@router.get("/health", summary="System health check")
async def health_check(registry: CameraRegistry = Depends(get_registry)):
    return {
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat(),
        "cameras": len(registry),
        "refreshing_snapshots": [c.id for c in registry.all() if c.snapshots.refresh_in_progress],
    }
