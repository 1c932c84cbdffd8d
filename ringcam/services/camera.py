# ringcam/services/camera.py
"""
RingCamera: one camera or doorbell.

Combines the reactive state container, the active ding tracker and the snapshot
service, and issues device commands through the REST client. Light and siren
commands are gated on the capabilities the initial record advertised and fold
the intended state back into the record without waiting for a confirming read.
"""

from typing import Optional

from ringcam.config import settings
from ringcam.schemas.camera import MODEL_NAMES, CameraData, SirenStatus
from ringcam.schemas.ding import ActiveDing, CameraHealth, DingKind, HistoricalDing
from ringcam.services.camera_state import CameraState
from ringcam.services.ding_tracker import DingTracker, Scheduler
from ringcam.services.rest_client import RequestSpec, RestClient, TransportError, client_api
from ringcam.services.snapshot_service import SnapshotService
from ringcam.utils.logger import get_logger

logger = get_logger(__name__)


class RingCamera:
    def __init__(self, initial_data: CameraData, is_doorbot: bool, rest_client: RestClient,
                 ding_scheduler: Optional[Scheduler] = None):
        self.id = initial_data.id
        self.device_type = initial_data.kind
        self.model = MODEL_NAMES.get(initial_data.kind, "Unknown Model")
        self.is_doorbot = is_doorbot
        self.has_light = initial_data.carries("led_status")
        self.has_siren = initial_data.carries("siren_status")
        self.has_slow_snapshot_refresh = initial_data.kind in settings.SLOW_SNAPSHOT_KINDS
        self.rest_client = rest_client

        self.state = CameraState(initial_data)
        self.dings = DingTracker(self.id, scheduler=ding_scheduler)
        self.snapshots = SnapshotService(self.id, rest_client, slow_refresh=self.has_slow_snapshot_refresh)

        self.on_data = self.state.on_data
        self.on_battery_level = self.state.on_battery_level
        self.on_request_update = self.state.on_request_update
        self.on_new_ding = self.dings.on_new_ding
        self.on_active_dings = self.dings.on_active_dings
        self.on_doorbell_pressed = self.dings.on_doorbell_pressed
        self.on_motion_detected = self.dings.on_motion_detected

    def __repr__(self):
        return f"<RingCamera {self.id} kind={self.device_type} name={self.name!r}>"

    # ── Cached reads ──────────────────────────────────────────────────────
    @property
    def data(self) -> CameraData:
        return self.state.current

    @property
    def name(self) -> str:
        return self.data.description

    @property
    def battery_level(self):
        return self.state.battery_level

    @property
    def active_dings(self) -> list[ActiveDing]:
        return self.dings.active_dings

    @property
    def is_motion_active(self) -> bool:
        return self.dings.is_motion_active

    def update_data(self, data: CameraData):
        self.state.update(data)

    def request_update(self):
        self.state.request_update()

    def process_active_ding(self, ding: ActiveDing):
        self.dings.process_ding(ding)

    def doorbot_url(self, path: str) -> str:
        return client_api(f"doorbots/{self.id}/{path}")

    # ── Commands ──────────────────────────────────────────────────────────
    async def set_light(self, on: bool) -> bool:
        if not self.has_light:
            return False

        state = "on" if on else "off"
        await self.rest_client.request(RequestSpec(
            method="PUT",
            url=self.doorbot_url(f"floodlight_light_{state}"),
        ))
        logger.info(f"💡 Camera {self.id} | light {state}")
        self.update_data(self.data.model_copy(update={"led_status": state}))
        return True

    async def set_siren(self, on: bool) -> bool:
        if not self.has_siren:
            return False

        state = "on" if on else "off"
        await self.rest_client.request(RequestSpec(
            method="PUT",
            url=self.doorbot_url(f"siren_{state}"),
        ))
        logger.info(f"🚨 Camera {self.id} | siren {state}")
        self.update_data(self.data.model_copy(update={"siren_status": SirenStatus(seconds_remaining=1)}))
        return True

    async def start_video_on_demand(self):
        return await self.rest_client.request(RequestSpec(
            method="POST",
            url=self.doorbot_url("vod"),
        ))

    async def get_sip_connection_details(self) -> ActiveDing:
        """Start a live view and wait for the on_demand ding that carries its SIP details."""
        vod_ding = self.on_new_ding.next_matching(lambda ding: ding.kind == DingKind.ON_DEMAND)
        try:
            await self.start_video_on_demand()
            return await vod_ding
        finally:
            vod_ding.cancel()   # no-op once resolved

    # ── Queries ───────────────────────────────────────────────────────────
    async def get_health(self) -> CameraHealth:
        url = self.doorbot_url("health")
        response = await self.rest_client.request(RequestSpec(url=url))
        device_health = response.get("device_health") if isinstance(response, dict) else None
        if device_health is None:
            raise TransportError(f"GET {url} returned no device_health", url)
        return CameraHealth.model_validate(device_health)

    async def get_history(self, limit: int = 10, favorites_only: bool = False) -> list[HistoricalDing]:
        favorites_param = "&favorites=1" if favorites_only else ""
        response = await self.rest_client.request(RequestSpec(
            url=self.doorbot_url(f"history?limit={limit}{favorites_param}"),
        ))
        return [HistoricalDing.model_validate(item) for item in response or []]

    async def get_recording(self, ding_id: str) -> str:
        response = await self.rest_client.request(RequestSpec(
            url=client_api(f"dings/{ding_id}/share/play?disable_redirect=true"),
        ))
        return response["url"]

    async def get_snapshot(self, allow_stale: bool = False) -> bytes:
        return await self.snapshots.get_snapshot(allow_stale)
