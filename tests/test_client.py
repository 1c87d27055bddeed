"""Tests for the Nanoleaf REST client against an in-process fake device."""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable

import pytest
from aiohttp import ClientSession, test_utils, web

from picoleaf.client import (
    NanoleafClient,
    NanoleafConnectionError,
    NanoleafResponseError,
)
from picoleaf.models import State

TOKEN = "s3cr3tT0k3n"


class _FakeDevice:
    """Minimal Nanoleaf REST API that records what it receives."""

    def __init__(self) -> None:
        self.puts: list[tuple[str, Any]] = []
        self.headers: list[dict[str, str]] = []
        self.effects_body: str | bytes = json.dumps(["Flames", "Forest"])
        self.info: dict[str, Any] = {
            "name": "Canvas",
            "model": "NL29",
            "state": {"on": {"value": True}, "brightness": {"value": 40}},
            "effects": {"select": "Forest", "effectsList": ["Flames", "Forest"]},
        }

    def app(self) -> web.Application:
        app = web.Application()
        base = "/api/v1/{token}"
        app.router.add_get(f"{base}/", self._get_info)
        app.router.add_get(f"{base}/state", self._get_state)
        app.router.add_get(f"{base}/effects/effectsList", self._get_effects)
        app.router.add_put(f"{base}/state", self._put)
        app.router.add_put(f"{base}/effects/select", self._put)
        return app

    def _authorized(self, request: web.Request) -> bool:
        self.headers.append(dict(request.headers))
        return request.match_info["token"] == TOKEN

    async def _get_info(self, request: web.Request) -> web.Response:
        if not self._authorized(request):
            return web.Response(status=401)
        return web.json_response(self.info)

    async def _get_state(self, request: web.Request) -> web.Response:
        if not self._authorized(request):
            return web.Response(status=401)
        return web.json_response(self.info["state"])

    async def _get_effects(self, request: web.Request) -> web.Response:
        if not self._authorized(request):
            return web.Response(status=401)
        if isinstance(self.effects_body, bytes):
            return web.Response(body=self.effects_body, content_type="application/json")
        return web.Response(text=self.effects_body, content_type="application/json")

    async def _put(self, request: web.Request) -> web.Response:
        if not self._authorized(request):
            return web.Response(status=401)
        path = request.path.split(f"/{TOKEN}/", 1)[1]
        self.puts.append((path, await request.json()))
        return web.Response(status=204)


def _run_with_device(
    device: _FakeDevice,
    fn: Callable[[NanoleafClient], Awaitable[Any]],
    token: str = TOKEN,
    **kwargs: Any,
) -> Any:
    async def runner() -> Any:
        async with test_utils.TestServer(device.app()) as server:
            client = NanoleafClient(f"{server.host}:{server.port}", token, **kwargs)
            return await fn(client)

    return asyncio.run(runner())


def test_endpoint() -> None:
    client = NanoleafClient("192.168.1.20:16021", "abc")
    assert client.endpoint("state") == "http://192.168.1.20:16021/api/v1/abc/state"
    assert client.endpoint("") == "http://192.168.1.20:16021/api/v1/abc/"


def test_turn_on_and_off() -> None:
    device = _FakeDevice()

    async def fn(client: NanoleafClient) -> None:
        await client.async_turn_on()
        await client.async_turn_off()

    _run_with_device(device, fn)
    assert device.puts == [
        ("state", {"on": {"value": True}}),
        ("state", {"on": {"value": False}}),
    ]


def test_put_headers() -> None:
    device = _FakeDevice()
    _run_with_device(device, lambda client: client.async_turn_on())
    headers = device.headers[0]
    assert headers["Content-Type"] == "application/json"
    assert headers["Accept"] == "application/json"


def test_set_rgb_sends_converted_hsl() -> None:
    device = _FakeDevice()
    _run_with_device(device, lambda client: client.async_set_rgb(255, 128, 0))
    assert device.puts == [
        (
            "state",
            {
                "brightness": {"value": 50},
                "hue": {"value": 30},
                "sat": {"value": 100},
            },
        )
    ]


def test_brightness_temperature_and_effect() -> None:
    device = _FakeDevice()

    async def fn(client: NanoleafClient) -> None:
        await client.async_set_brightness(80)
        await client.async_set_brightness(10, duration=3)
        await client.async_set_color_temperature(6500)
        await client.async_select_effect("Flames")

    _run_with_device(device, fn)
    assert device.puts == [
        ("state", {"brightness": {"value": 80}}),
        ("state", {"brightness": {"value": 10, "duration": 3}}),
        ("state", {"ct": {"value": 6500}}),
        ("effects/select", {"select": "Flames"}),
    ]


def test_list_effects() -> None:
    device = _FakeDevice()
    effects = _run_with_device(device, lambda client: client.async_list_effects())
    assert effects == ["Flames", "Forest"]
    assert device.headers[0]["Accept"] == "application/json"


def test_list_effects_invalid_json() -> None:
    device = _FakeDevice()
    device.effects_body = "not-json"
    with pytest.raises(NanoleafResponseError):
        _run_with_device(device, lambda client: client.async_list_effects())


def test_list_effects_undecodable_body() -> None:
    device = _FakeDevice()
    device.effects_body = b"\xff\xfe["
    with pytest.raises(NanoleafResponseError, match="undecodable"):
        _run_with_device(device, lambda client: client.async_list_effects())


def test_list_effects_wrong_shape() -> None:
    device = _FakeDevice()
    device.effects_body = json.dumps({"effectsList": []})
    with pytest.raises(NanoleafResponseError):
        _run_with_device(device, lambda client: client.async_list_effects())


def test_get_panel_info_and_state() -> None:
    device = _FakeDevice()

    async def fn(client: NanoleafClient) -> tuple[Any, State]:
        return await client.async_get_panel_info(), await client.async_get_state()

    info, state = _run_with_device(device, fn)
    assert info.name == "Canvas"
    assert info.model == "NL29"
    assert info.effects.effects_list == ["Flames", "Forest"]
    assert state.brightness.value == 40
    assert state.on.value is True


def test_unauthorized_token_raises_with_status() -> None:
    device = _FakeDevice()
    with pytest.raises(NanoleafResponseError) as exc_info:
        _run_with_device(device, lambda client: client.async_turn_on(), token="bad")
    assert exc_info.value.status == 401
    assert device.puts == []


def test_connection_refused() -> None:
    async def runner() -> None:
        async with test_utils.TestServer(web.Application()) as server:
            host = f"{server.host}:{server.port}"
        client = NanoleafClient(host, TOKEN, timeout=5)
        await client.async_turn_on()

    with pytest.raises(NanoleafConnectionError):
        asyncio.run(runner())


def test_caller_owned_session() -> None:
    device = _FakeDevice()

    async def runner() -> bool:
        async with test_utils.TestServer(device.app()) as server:
            async with ClientSession() as session:
                async with NanoleafClient(
                    f"{server.host}:{server.port}", TOKEN, session=session
                ) as client:
                    await client.async_turn_on()
                    await client.async_turn_off()
                return session.closed

    assert asyncio.run(runner()) is False
    assert len(device.puts) == 2


def test_verbose_logs_requests_without_token(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="picoleaf.client")
    device = _FakeDevice()
    _run_with_device(
        device, lambda client: client.async_set_hsl(120, 100, 50), verbose=True
    )
    messages = [
        r.getMessage() for r in caplog.records if r.name == "picoleaf.client"
    ]
    assert any(m.startswith("PUT ") and m.endswith("/state") for m in messages)
    assert any(m.startswith("===> ") and '"hue"' in m for m in messages)
    assert all(TOKEN not in m for m in messages)


def test_quiet_client_logs_only_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="picoleaf.client")
    device = _FakeDevice()
    _run_with_device(device, lambda client: client.async_turn_on())
    assert [r for r in caplog.records if r.name == "picoleaf.client"] == []
