# ringcam/services/rest_client.py
"""
Thin transport wrapper around one shared httpx.AsyncClient.

Every camera operation describes its call as a RequestSpec and hands it to
RestClient.request(). Network and HTTP failures surface as TransportError;
retrying is left to the caller.
"""

import time
from dataclasses import dataclass
from email.utils import parsedate_to_datetime
from typing import Any, Optional

import httpx

from ringcam.config import settings
from ringcam.utils.logger import get_logger

logger = get_logger(__name__)


def client_api(path: str) -> str:
    return settings.RING_API_BASE_URL.rstrip("/") + "/" + path.lstrip("/")


class TransportError(Exception):
    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


@dataclass
class RequestSpec:
    url: str
    method: str = "GET"
    data: Optional[Any] = None          # request body
    json: bool = True                   # send data as a JSON body
    response_type: str = "json"         # json | arraybuffer


def _response_timestamp(response: httpx.Response) -> int:
    """Server time (epoch ms) from the Date header, local clock when absent or unparseable."""
    date_header = response.headers.get("date")
    if date_header:
        try:
            return int(parsedate_to_datetime(date_header).timestamp() * 1000)
        except (TypeError, ValueError):
            logger.debug(f"Unparseable Date header: {date_header!r}")
    return int(time.time() * 1000)


class RestClient:
    def __init__(self, client: Optional[httpx.AsyncClient] = None, headers: Optional[dict] = None):
        self._client = client or httpx.AsyncClient(
            timeout=settings.REQUEST_TIMEOUT_SECONDS,
            headers=headers,
        )

    async def request(self, spec: RequestSpec) -> Any:
        kwargs = {}
        if spec.data is not None:
            if spec.json:
                kwargs["json"] = spec.data
            else:
                kwargs["data"] = spec.data

        start = time.time()
        try:
            response = await self._client.request(spec.method, spec.url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"{spec.method} {spec.url} returned HTTP {e.response.status_code}",
                spec.url,
                e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"{spec.method} {spec.url} failed: {e}", spec.url) from e

        duration = round((time.time() - start) * 1000, 2)
        logger.debug(f"{spec.method} {spec.url} → {response.status_code} ({duration}ms)")

        if spec.response_type == "arraybuffer":
            return response.content
        if not response.content:
            return None

        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(f"{spec.method} {spec.url} returned invalid JSON", spec.url,
                                 response.status_code) from e

        if isinstance(body, dict):
            body["responseTimestamp"] = _response_timestamp(response)
        return body

    async def close(self):
        await self._client.aclose()
