# ringcam/services/snapshot_service.py
"""
Snapshot service: returns the current camera image, after first making sure the
backend's last capture is recent.

Freshness can only be checked indirectly: POST snapshots/timestamps returns the
time of the latest capture, which is compared to the time the response arrived.
The check is repeated until the gap is under the grace period or the attempt
budget runs out. An exhausted or failed check is logged, never raised; the
image is fetched either way.

Concurrent callers share one refresh session per camera.

Endpoints:
  POST snapshots/timestamps   {"doorbot_ids": [id]}
  GET  snapshots/image/{id}   (JPEG bytes)
"""

import asyncio
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ringcam.config import settings
from ringcam.schemas.ding import SnapshotTimestamp
from ringcam.services.rest_client import RequestSpec, RestClient, TransportError, client_api
from ringcam.utils.logger import get_logger

logger = get_logger(__name__)


class RefreshState(str, Enum):
    IDLE = "idle"
    CHECKING = "checking"
    FRESH = "fresh"
    EXHAUSTED = "exhausted"


class SnapshotRefreshError(Exception):
    def __init__(self, device_id: int, attempts: int):
        super().__init__(f"Snapshot for camera {device_id} failed to refresh after {attempts} attempts")
        self.device_id = device_id
        self.attempts = attempts


@dataclass
class SnapshotTimestampSample:
    capture_time: int      # epoch ms reported by the device
    response_time: int     # epoch ms the check response arrived

    @property
    def age(self) -> int:
        return abs(self.response_time - self.capture_time)


@dataclass(frozen=True)
class RefreshPlan:
    interval_ms: int
    max_seconds: int

    @property
    def max_attempts(self) -> int:
        return self.max_seconds * 1000 // self.interval_ms


def plan_refresh(slow_refresh: bool, allow_stale: bool) -> RefreshPlan:
    if slow_refresh and not allow_stale:
        return RefreshPlan(interval_ms=2000, max_seconds=600)   # wait out the ~10 min timestamp cycle
    if slow_refresh:
        return RefreshPlan(interval_ms=500, max_seconds=5)      # stale is ok, fail fast
    return RefreshPlan(interval_ms=500, max_seconds=30)


class SnapshotService:
    def __init__(self, device_id: int, rest_client: RestClient, slow_refresh: bool = False,
                 grace_period_ms: Optional[int] = None):
        self.device_id = device_id
        self.rest_client = rest_client
        self.slow_refresh = slow_refresh
        self.grace_period_ms = (
            settings.SNAPSHOT_GRACE_PERIOD_MS if grace_period_ms is None else grace_period_ms
        )
        self.state = RefreshState.IDLE
        self.last_result: Optional[RefreshState] = None
        self._session: Optional[asyncio.Task] = None

    @property
    def refresh_in_progress(self) -> bool:
        return self._session is not None

    async def fetch_timestamp_sample(self) -> SnapshotTimestampSample:
        response = await self.rest_client.request(RequestSpec(
            url=client_api("snapshots/timestamps"),
            method="POST",
            data={"doorbot_ids": [self.device_id]},
        ))
        timestamps = response.get("timestamps") or []
        latest = SnapshotTimestamp.model_validate(timestamps[0]) if timestamps else None
        capture_time = latest.timestamp if latest and latest.timestamp is not None else 0
        response_time = response.get("responseTimestamp")
        if response_time is None:
            response_time = int(time.time() * 1000)
        return SnapshotTimestampSample(capture_time=capture_time, response_time=response_time)

    async def refresh(self, allow_stale: bool = False) -> int:
        """
        Poll until the latest capture is within the grace period.
        Returns the number of attempts used; raises SnapshotRefreshError when the
        plan's budget is exhausted. Transport errors propagate.
        """
        plan = plan_refresh(self.slow_refresh, allow_stale)
        self.state = RefreshState.CHECKING

        for attempt in range(1, plan.max_attempts + 1):
            sample = await self.fetch_timestamp_sample()
            if sample.age < self.grace_period_ms:
                self.state = RefreshState.FRESH
                return attempt
            if attempt < plan.max_attempts:
                await asyncio.sleep(plan.interval_ms / 1000)

        self.state = RefreshState.EXHAUSTED
        raise SnapshotRefreshError(self.device_id, plan.max_attempts)

    async def ensure_fresh(self, allow_stale: bool = False) -> bool:
        """
        Join the running refresh session or start one. True when the session found
        a fresh capture. A caller joining a running session shares its outcome,
        whatever allow_stale it asked for.
        """
        if self._session is None:
            self._session = asyncio.ensure_future(self._run_session(allow_stale))
            self._session.add_done_callback(self._clear_session)
        # Shielded: the session always runs to completion
        return await asyncio.shield(self._session)

    async def get_snapshot(self, allow_stale: bool = False) -> bytes:
        await self.ensure_fresh(allow_stale)
        return await self.rest_client.request(RequestSpec(
            url=client_api(f"snapshots/image/{self.device_id}"),
            response_type="arraybuffer",
        ))

    async def _run_session(self, allow_stale: bool) -> bool:
        logger.info(f"[SNAPSHOT] Camera {self.device_id} | refresh started (allow_stale={allow_stale})")
        try:
            attempts = await self.refresh(allow_stale)
        except SnapshotRefreshError as e:
            self.last_result = RefreshState.EXHAUSTED
            logger.warning(f"[SNAPSHOT] {e}")
            return False
        except TransportError as e:
            self.last_result = None
            logger.error(f"[SNAPSHOT] Camera {self.device_id} | timestamp check failed: {e}")
            return False
        except Exception as e:
            self.last_result = None
            logger.error(f"[SNAPSHOT] Camera {self.device_id} | refresh error: {e}", exc_info=True)
            return False

        self.last_result = RefreshState.FRESH
        logger.info(f"[SNAPSHOT] Camera {self.device_id} | fresh after {attempts} attempt(s)")
        return True

    def _clear_session(self, task: asyncio.Task):
        if self._session is task:
            self._session = None
            self.state = RefreshState.IDLE
