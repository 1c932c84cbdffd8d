# ringcam/services/ding_tracker.py
"""
Active ding lifecycle for one camera.

Every processed ding is published on on_new_ding, appended to the active set
(on_active_dings) and scheduled for removal DING_EXPIRY_SECONDS later. Each
ding owns its own timer; removal is by identity, so an expiring ding never
takes a different ding with identical content along with it.

Derived channels:
  on_doorbell_pressed  — new dings of kind "ding"
  on_motion_detected   — replay-latest bool, True while any active ding is motion
"""

import asyncio
from typing import Any, Callable, Optional

from ringcam.config import settings
from ringcam.schemas.ding import ActiveDing, DingKind
from ringcam.utils.channels import Channel, ReplayChannel
from ringcam.utils.logger import get_logger

logger = get_logger(__name__)

Scheduler = Callable[[float, Callable[[], None]], Any]


def loop_scheduler(delay: float, callback: Callable[[], None]):
    return asyncio.get_running_loop().call_later(delay, callback)


def is_motion_ding(ding: ActiveDing) -> bool:
    return ding.motion or ding.kind == DingKind.MOTION


class DingTracker:
    def __init__(self, device_id: int, expire_after: Optional[float] = None,
                 scheduler: Optional[Scheduler] = None):
        self.device_id = device_id
        self.expire_after = settings.DING_EXPIRY_SECONDS if expire_after is None else expire_after
        self._schedule = scheduler or loop_scheduler

        self.on_new_ding = Channel(name=f"new-ding-{device_id}")
        self.on_active_dings = ReplayChannel([], name=f"active-dings-{device_id}")
        self.on_doorbell_pressed = Channel(name=f"doorbell-pressed-{device_id}")
        self.on_motion_detected = ReplayChannel(False, name=f"motion-{device_id}", distinct=True)

        self.on_new_ding.subscribe(self._forward_doorbell_press)
        self.on_active_dings.subscribe(self._recompute_motion)

    @property
    def active_dings(self) -> list[ActiveDing]:
        return list(self.on_active_dings.value)

    @property
    def is_motion_active(self) -> bool:
        return self.on_motion_detected.value

    def process_ding(self, ding: ActiveDing):
        logger.info(f"🔔 Camera {self.device_id} | new {ding.kind} ding {ding.id}")
        self.on_new_ding.emit(ding)
        self.on_active_dings.emit(self.active_dings + [ding])
        self._schedule(self.expire_after, lambda: self._expire(ding))

    def _expire(self, ding: ActiveDing):
        current = self.on_active_dings.value
        remaining = [d for d in current if d is not ding]
        if len(remaining) == len(current):
            return
        logger.debug(f"Camera {self.device_id} | {ding.kind} ding {ding.id} expired")
        self.on_active_dings.emit(remaining)

    def _forward_doorbell_press(self, ding: ActiveDing):
        if ding.kind == DingKind.DING:
            self.on_doorbell_pressed.emit(ding)

    def _recompute_motion(self, dings: list[ActiveDing]):
        self.on_motion_detected.emit(any(is_motion_ding(d) for d in dings))
