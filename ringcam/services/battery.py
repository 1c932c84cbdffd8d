# ringcam/services/battery.py
"""Derived values computed from a raw CameraData record."""

import math
import re
from typing import Optional, Union

from ringcam.schemas.camera import CameraData

# Leading decimal number, e.g. "55", "55%", " 87.5 V", "1e2"
_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_battery_life(raw) -> Optional[Union[int, float]]:
    """
    Numbers pass through; strings are read up to the first non-numeric
    character ("55%" → 55.0). Anything else, including NaN and booleans,
    resolves to None.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        level = raw
    elif isinstance(raw, str):
        match = _LEADING_NUMBER.match(raw)
        if not match:
            return None
        level = float(match.group(1))
    else:
        return None

    if isinstance(level, float) and math.isnan(level):
        return None
    return level


def get_battery_level(data: CameraData) -> Optional[Union[int, float]]:
    return parse_battery_life(data.battery_life)
