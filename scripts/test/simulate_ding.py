"""Hand test device records and dings to a running backend."""

import argparse
import random
import requests
from datetime import datetime

BACKEND_URL = "http://127.0.0.1:8000/api/v1"

CAMERA_TEMPLATE = {
    "id": 0,
    "kind": "doorbell_v3",
    "description": "Front Door (simulated)",
    "battery_life": "87",
    "led_status": "off",
    "siren_status": {"seconds_remaining": 0},
}


def register_camera(device_id, kind, api_key=None):
    payload = dict(CAMERA_TEMPLATE, id=device_id, kind=kind)
    resp = requests.put(f"{BACKEND_URL}/cameras", json=payload, params={"is_doorbot": True},
                        headers=_headers(api_key), timeout=10)
    print(f"✅ camera {device_id} ({kind}) → HTTP {resp.status_code}")


def simulate_ding(device_id, kind, motion, api_key=None):
    ding_id = random.randint(10**17, 10**18)
    payload = {
        "id": ding_id,
        "id_str": str(ding_id),
        "kind": kind,
        "motion": motion,
        "doorbot_id": device_id,
        "state": "ringing",
        "created_at": datetime.utcnow().strftime("%Y-%m-%dT%H:%M:%SZ"),
    }
    resp = requests.post(f"{BACKEND_URL}/cameras/{device_id}/dings", json=payload,
                         headers=_headers(api_key), timeout=10)
    print(f"✅ {kind} ding → HTTP {resp.status_code}: {resp.json()}")


def _headers(api_key):
    return {"X-API-Key": api_key} if api_key else {}


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Simulate Ring dings for testing")
    parser.add_argument("--camera", type=int, default=12345)
    parser.add_argument("--camera-kind", default="doorbell_v3")
    parser.add_argument("--kind", default="ding", choices=["ding", "motion", "on_demand"])
    parser.add_argument("--motion", action="store_true")
    parser.add_argument("--register", action="store_true", help="register the camera first")
    parser.add_argument("--api-key", default=None)
    args = parser.parse_args()

    if args.register:
        register_camera(args.camera, args.camera_kind, args.api_key)
    simulate_ding(args.camera, args.kind, args.motion, args.api_key)
