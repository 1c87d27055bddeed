"""Async client for the Nanoleaf local REST API."""
from __future__ import annotations

import asyncio
import json
import logging
from types import TracebackType
from typing import Any

from aiohttp import ClientError, ClientSession, ClientTimeout

from picoleaf import const
from picoleaf.color import rgb_to_hsl
from picoleaf.models import (
    BrightnessProperty,
    ColorTemperatureProperty,
    HueProperty,
    OnProperty,
    PanelInfo,
    SaturationProperty,
    State,
)

_LOGGER = logging.getLogger(__name__)

_HEADERS_GET = {"Accept": "application/json"}
_HEADERS_PUT = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class NanoleafError(Exception):
    """Base error for the Nanoleaf client."""


class NanoleafConnectionError(NanoleafError):
    """The device could not be reached or did not answer in time."""


class NanoleafResponseError(NanoleafError):
    """The device answered with an error status or an unreadable body."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class NanoleafClient:
    """Client for a single Nanoleaf device.

    ``host`` may include a port (``192.168.1.20:16021``). When no ``session``
    is given, every request opens and closes its own ``ClientSession``.
    """

    def __init__(
        self,
        host: str,
        token: str,
        *,
        verbose: bool = False,
        timeout: float = const.DEFAULT_TIMEOUT,
        session: ClientSession | None = None,
    ) -> None:
        self._host = host
        self._token = token
        self._verbose = verbose
        self._timeout = ClientTimeout(total=timeout)
        self._session = session

    async def __aenter__(self) -> NanoleafClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        return None

    @property
    def host(self) -> str:
        """Return the device host."""
        return self._host

    def endpoint(self, path: str) -> str:
        """Return the full URL for an API endpoint."""
        return f"http://{self._host}/{const.API_PATH}/{self._token}/{path}"

    def _log_endpoint(self, path: str) -> str:
        return f"http://{self._host}/{const.API_PATH}/<redacted>/{path}"

    def _trace(self, msg: str, *args: Any) -> None:
        _LOGGER.log(logging.INFO if self._verbose else logging.DEBUG, msg, *args)

    async def _request(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        data: str | None = None,
    ) -> str:
        try:
            if self._session is not None:
                return await self._send(self._session, method, path, headers, data)
            async with ClientSession(timeout=self._timeout) as session:
                return await self._send(session, method, path, headers, data)
        except asyncio.TimeoutError as err:
            raise NanoleafConnectionError(
                f"Timed out talking to Nanoleaf at {self._host}"
            ) from err
        except ClientError as err:
            raise NanoleafConnectionError(
                f"Failed to reach Nanoleaf at {self._host}: {err}"
            ) from err

    async def _send(
        self,
        session: ClientSession,
        method: str,
        path: str,
        headers: dict[str, str],
        data: str | None,
    ) -> str:
        async with session.request(
            method,
            self.endpoint(path),
            headers=headers,
            data=data,
            timeout=self._timeout,
        ) as resp:
            raw = await resp.read()
            if resp.status >= 400:
                _LOGGER.warning(
                    "Nanoleaf %s %s returned HTTP %d",
                    method,
                    self._log_endpoint(path),
                    resp.status,
                )
                raise NanoleafResponseError(
                    f"Nanoleaf returned HTTP {resp.status} for {method} {path!r}",
                    status=resp.status,
                )
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as err:
            raise NanoleafResponseError(
                f"Nanoleaf returned an undecodable body for {method} {path!r}"
            ) from err

    async def async_get(self, path: str) -> str:
        """Perform a GET request and return the response body."""
        self._trace("GET %s", self._log_endpoint(path))
        body = await self._request("GET", path, _HEADERS_GET)
        self._trace("<=== %s", body)
        return body

    async def async_put(self, path: str, body: dict[str, Any]) -> None:
        """Perform a PUT request with a JSON body."""
        data = json.dumps(body)
        self._trace("PUT %s", self._log_endpoint(path))
        self._trace("===> %s", data)
        await self._request("PUT", path, _HEADERS_PUT, data)

    async def _async_get_json(self, path: str) -> Any:
        body = await self.async_get(path)
        try:
            return json.loads(body)
        except json.JSONDecodeError as err:
            raise NanoleafResponseError(
                f"Nanoleaf returned non-JSON body for {path!r}: {body[:100]}"
            ) from err

    async def async_get_panel_info(self) -> PanelInfo:
        """Return the panel info (name, firmware, state, effects, layout)."""
        payload = await self._async_get_json(const.PATH_INFO)
        if not isinstance(payload, dict):
            raise NanoleafResponseError("Nanoleaf panel info is not an object")
        return PanelInfo.from_dict(payload)

    async def async_get_state(self) -> State:
        """Return the current panel state."""
        payload = await self._async_get_json(const.PATH_STATE)
        if not isinstance(payload, dict):
            raise NanoleafResponseError("Nanoleaf state is not an object")
        return State.from_dict(payload)

    async def async_list_effects(self) -> list[str]:
        """Return the names of the effects stored on the device."""
        payload = await self._async_get_json(const.PATH_EFFECTS_LIST)
        if not isinstance(payload, list):
            raise NanoleafResponseError("Nanoleaf effects list is not an array")
        return [str(name) for name in payload]

    async def async_set_state(self, state: State) -> None:
        """Send a (partial) state update."""
        await self.async_put(const.PATH_STATE, state.as_dict())

    async def async_turn_on(self) -> None:
        """Turn the panels on."""
        await self.async_set_state(State(on=OnProperty(True)))

    async def async_turn_off(self) -> None:
        """Turn the panels off."""
        await self.async_set_state(State(on=OnProperty(False)))

    async def async_select_effect(self, name: str) -> None:
        """Activate the named effect."""
        await self.async_put(const.PATH_EFFECTS_SELECT, {const.KEY_SELECT: name})

    async def async_set_brightness(
        self, brightness: int, duration: int | None = None
    ) -> None:
        """Set brightness in percent, optionally fading over ``duration`` seconds."""
        await self.async_set_state(
            State(brightness=BrightnessProperty(brightness, duration=duration))
        )

    async def async_set_color_temperature(self, temperature: int) -> None:
        """Set colour temperature in kelvin."""
        await self.async_set_state(State(ct=ColorTemperatureProperty(temperature)))

    async def async_set_hsl(self, hue: int, sat: int, lightness: int) -> None:
        """Set hue, saturation and lightness (sent as brightness)."""
        await self.async_set_state(
            State(
                brightness=BrightnessProperty(lightness),
                hue=HueProperty(hue),
                sat=SaturationProperty(sat),
            )
        )

    async def async_set_rgb(self, red: int, green: int, blue: int) -> None:
        """Set the colour from RGB channels (0-255)."""
        hue, sat, lightness = rgb_to_hsl(red, green, blue)
        _LOGGER.debug(
            "RGB (%d, %d, %d) -> HSL (%d, %d, %d)",
            red,
            green,
            blue,
            hue,
            sat,
            lightness,
        )
        await self.async_set_hsl(hue, sat, lightness)
