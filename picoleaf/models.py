"""Data records for Nanoleaf REST API payloads."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TypeVar

from picoleaf import const

_RangeT = TypeVar("_RangeT", bound="_RangeProperty")


def _without_none(payload: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


def _as_dict(payload: Any) -> dict[str, Any]:
    return payload if isinstance(payload, dict) else {}


def _range_fields(payload: dict[str, Any]) -> dict[str, Any]:
    return {
        "value": payload.get(const.KEY_VALUE, 0),
        "min": payload.get(const.KEY_MIN),
        "max": payload.get(const.KEY_MAX),
    }


@dataclass(slots=True)
class OnProperty:
    """Power state of the panels."""

    value: bool

    def as_dict(self) -> dict[str, Any]:
        return {const.KEY_VALUE: self.value}

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> OnProperty:
        return cls(value=bool(payload.get(const.KEY_VALUE, False)))


@dataclass(slots=True)
class BrightnessProperty:
    """Brightness in percent, with an optional transition duration in seconds."""

    value: int
    duration: int | None = None
    min: int | None = None
    max: int | None = None

    def as_dict(self) -> dict[str, Any]:
        return _without_none(
            {
                const.KEY_MIN: self.min,
                const.KEY_MAX: self.max,
                const.KEY_VALUE: self.value,
                const.KEY_DURATION: self.duration,
            }
        )

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> BrightnessProperty:
        return cls(duration=payload.get(const.KEY_DURATION), **_range_fields(payload))


@dataclass(slots=True)
class _RangeProperty:
    value: int
    min: int | None = None
    max: int | None = None

    def as_dict(self) -> dict[str, Any]:
        return _without_none(
            {
                const.KEY_MIN: self.min,
                const.KEY_MAX: self.max,
                const.KEY_VALUE: self.value,
            }
        )

    @classmethod
    def from_dict(cls: type[_RangeT], payload: dict[str, Any]) -> _RangeT:
        return cls(**_range_fields(payload))


class ColorTemperatureProperty(_RangeProperty):
    """Colour temperature in kelvin."""

    __slots__ = ()


class HueProperty(_RangeProperty):
    """Hue in degrees."""

    __slots__ = ()


class SaturationProperty(_RangeProperty):
    """Saturation in percent."""

    __slots__ = ()


_STATE_FIELDS = (
    ("on", const.KEY_ON, OnProperty),
    ("brightness", const.KEY_BRIGHTNESS, BrightnessProperty),
    ("ct", const.KEY_CT, ColorTemperatureProperty),
    ("hue", const.KEY_HUE, HueProperty),
    ("sat", const.KEY_SAT, SaturationProperty),
)


@dataclass(slots=True)
class State:
    """Panel state.

    Every field is optional. Fields left as ``None`` are not sent, so a
    ``State`` can describe a partial update as well as a full reading.
    """

    on: OnProperty | None = None
    brightness: BrightnessProperty | None = None
    ct: ColorTemperatureProperty | None = None
    hue: HueProperty | None = None
    sat: SaturationProperty | None = None
    color_mode: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return the JSON body for a state PUT, skipping unset fields."""
        payload: dict[str, Any] = {}
        for attr, key, _ in _STATE_FIELDS:
            prop = getattr(self, attr)
            if prop is not None:
                payload[key] = prop.as_dict()
        if self.color_mode:
            payload[const.KEY_COLOR_MODE] = self.color_mode
        return payload

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> State:
        kwargs: dict[str, Any] = {}
        for attr, key, prop_cls in _STATE_FIELDS:
            value = payload.get(key)
            if isinstance(value, dict):
                kwargs[attr] = prop_cls.from_dict(value)
        return cls(color_mode=payload.get(const.KEY_COLOR_MODE), **kwargs)


@dataclass(slots=True)
class Effects:
    """Selected effect and the effects stored on the device."""

    selected: str | None = None
    effects_list: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> Effects:
        return cls(
            selected=payload.get(const.KEY_SELECT),
            effects_list=list(payload.get(const.KEY_EFFECTS_LIST) or []),
        )


@dataclass(slots=True)
class Position:
    """Position and orientation of a panel or the rhythm module."""

    x: float = 0
    y: float = 0
    o: float = 0

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> Position:
        return cls(
            x=payload.get(const.KEY_X, 0),
            y=payload.get(const.KEY_Y, 0),
            o=payload.get(const.KEY_O, 0),
        )


@dataclass(slots=True)
class Rhythm:
    """State of the rhythm (microphone) module."""

    connected: bool = False
    active: bool = False
    id: int = 0
    hardware_version: str = ""
    firmware_version: str = ""
    aux_available: bool = False
    mode: int = 0
    position: Position = field(default_factory=Position)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> Rhythm:
        return cls(
            connected=bool(payload.get(const.KEY_RHYTHM_CONNECTED, False)),
            active=bool(payload.get(const.KEY_RHYTHM_ACTIVE, False)),
            id=payload.get(const.KEY_RHYTHM_ID, 0),
            hardware_version=payload.get(const.KEY_HARDWARE_VERSION, ""),
            firmware_version=payload.get(const.KEY_FIRMWARE_VERSION, ""),
            aux_available=bool(payload.get(const.KEY_AUX_AVAILABLE, False)),
            mode=payload.get(const.KEY_RHYTHM_MODE, 0),
            position=Position.from_dict(_as_dict(payload.get(const.KEY_RHYTHM_POS))),
        )


@dataclass(slots=True)
class PanelPosition:
    """Placement of a single panel in the layout."""

    panel_id: int
    x: int = 0
    y: int = 0
    o: int = 0
    shape_type: int = 0

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> PanelPosition:
        return cls(
            panel_id=payload.get(const.KEY_PANEL_ID, 0),
            x=payload.get(const.KEY_X, 0),
            y=payload.get(const.KEY_Y, 0),
            o=payload.get(const.KEY_O, 0),
            shape_type=payload.get(const.KEY_SHAPE_TYPE, 0),
        )


@dataclass(slots=True)
class PanelLayout:
    """Panel layout and global orientation."""

    num_panels: int = 0
    side_length: int = 0
    positions: list[PanelPosition] = field(default_factory=list)
    orientation: int = 0
    orientation_min: int = 0
    orientation_max: int = 0

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> PanelLayout:
        layout = _as_dict(payload.get(const.KEY_LAYOUT))
        orientation = _as_dict(payload.get(const.KEY_GLOBAL_ORIENTATION))
        return cls(
            num_panels=layout.get(const.KEY_NUM_PANELS, 0),
            side_length=layout.get(const.KEY_SIDE_LENGTH, 0),
            positions=[
                PanelPosition.from_dict(item)
                for item in layout.get(const.KEY_POSITION_DATA) or []
                if isinstance(item, dict)
            ],
            orientation=orientation.get(const.KEY_VALUE, 0),
            orientation_min=orientation.get(const.KEY_MIN, 0),
            orientation_max=orientation.get(const.KEY_MAX, 0),
        )


@dataclass(slots=True)
class PanelInfo:
    """Response of the info endpoint (``GET /api/v1/<token>/``)."""

    name: str = ""
    serial_no: str = ""
    manufacturer: str = ""
    firmware_version: str = ""
    model: str = ""
    state: State = field(default_factory=State)
    effects: Effects = field(default_factory=Effects)
    panel_layout: PanelLayout = field(default_factory=PanelLayout)
    rhythm: Rhythm = field(default_factory=Rhythm)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> PanelInfo:
        return cls(
            name=payload.get(const.KEY_NAME, ""),
            serial_no=payload.get(const.KEY_SERIAL_NO, ""),
            manufacturer=payload.get(const.KEY_MANUFACTURER, ""),
            firmware_version=payload.get(const.KEY_FIRMWARE_VERSION, ""),
            model=payload.get(const.KEY_MODEL, ""),
            state=State.from_dict(_as_dict(payload.get(const.KEY_STATE))),
            effects=Effects.from_dict(_as_dict(payload.get(const.KEY_EFFECTS))),
            panel_layout=PanelLayout.from_dict(
                _as_dict(payload.get(const.KEY_PANEL_LAYOUT))
            ),
            rhythm=Rhythm.from_dict(_as_dict(payload.get(const.KEY_RHYTHM))),
        )
