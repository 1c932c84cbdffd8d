"""Unit tests for the httpx transport wrapper."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import json
import httpx
import pytest
from ringcam.services.rest_client import RequestSpec, RestClient, TransportError, client_api


def make_client(handler):
    return RestClient(httpx.AsyncClient(transport=httpx.MockTransport(handler)))


class TestRestClient:
    def test_client_api_joins_paths(self):
        assert client_api("doorbots/1/health").endswith("/clients_api/doorbots/1/health")

    @pytest.mark.asyncio
    async def test_json_object_gets_response_timestamp(self):
        def handler(request):
            return httpx.Response(200, json={"ok": True},
                                  headers={"Date": "Wed, 21 Oct 2015 07:28:00 GMT"})

        body = await make_client(handler).request(RequestSpec(url="https://api.test/x"))
        assert body == {"ok": True, "responseTimestamp": 1445412480000}

    @pytest.mark.asyncio
    async def test_json_list_returned_as_is(self):
        def handler(request):
            return httpx.Response(200, json=[1, 2])

        assert await make_client(handler).request(RequestSpec(url="https://api.test/x")) == [1, 2]

    @pytest.mark.asyncio
    async def test_sends_json_body(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={})

        await make_client(handler).request(
            RequestSpec(url="https://api.test/snapshots/timestamps", method="POST",
                        data={"doorbot_ids": [1]})
        )
        assert seen == {"method": "POST", "body": {"doorbot_ids": [1]}}

    @pytest.mark.asyncio
    async def test_arraybuffer_returns_bytes(self):
        def handler(request):
            return httpx.Response(200, content=b"\xff\xd8")

        image = await make_client(handler).request(
            RequestSpec(url="https://api.test/img", response_type="arraybuffer")
        )
        assert image == b"\xff\xd8"

    @pytest.mark.asyncio
    async def test_empty_body_is_none(self):
        def handler(request):
            return httpx.Response(204)

        assert await make_client(handler).request(RequestSpec(url="https://api.test/x", method="PUT")) is None

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        def handler(request):
            return httpx.Response(503)

        with pytest.raises(TransportError) as exc_info:
            await make_client(handler).request(RequestSpec(url="https://api.test/x"))
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(TransportError) as exc_info:
            await make_client(handler).request(RequestSpec(url="https://api.test/x"))
        assert exc_info.value.status_code is None
