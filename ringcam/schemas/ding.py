# ringcam/schemas/ding.py
from datetime import datetime
from enum import Enum
from pydantic import BaseModel
from typing import Optional, Union


class DingKind(str, Enum):
    DING = "ding"
    MOTION = "motion"
    ON_DEMAND = "on_demand"


class ActiveDing(BaseModel):
    """
    A live event handed in from the event channel. Two dings with identical
    content are still distinct; the tracker compares them by identity.
    """
    id: Union[int, str]
    id_str: Optional[str] = None
    kind: str                                  # ding | motion | on_demand
    motion: bool = False
    doorbot_id: int
    state: Optional[str] = None
    # SIP details, present for on_demand / ding sessions
    protocol: Optional[str] = None
    sip_server_ip: Optional[str] = None
    sip_server_port: Optional[int] = None
    sip_server_tls: Optional[bool] = None
    sip_session_id: Optional[str] = None
    sip_from: Optional[str] = None
    sip_to: Optional[str] = None
    sip_token: Optional[str] = None
    sip_ding_id: Optional[str] = None

    class Config:
        extra = "allow"


class HistoricalDing(BaseModel):
    id: Union[int, str]
    created_at: datetime
    kind: str
    answered: bool = False
    favorite: bool = False
    duration: Optional[float] = None
    snapshot_url: Optional[str] = None
    recording: Optional[dict] = None

    class Config:
        extra = "allow"


class CameraHealth(BaseModel):
    id: int
    wifi_name: Optional[str] = None
    battery_percentage: Optional[Union[int, str]] = None
    battery_voltage: Optional[float] = None
    firmware: Optional[str] = None
    latest_signal_strength: Optional[int] = None
    latest_signal_category: Optional[str] = None
    average_signal_strength: Optional[int] = None
    average_signal_category: Optional[str] = None

    class Config:
        extra = "allow"


class SnapshotTimestamp(BaseModel):
    doorbot_id: Optional[int] = None
    timestamp: Optional[int] = None   # epoch ms of the most recent capture
