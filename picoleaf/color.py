"""RGB to HSL conversion for the Nanoleaf state API.

The panels take hue in degrees and saturation/brightness in percent, so the
conversion produces integers in those ranges rather than unit fractions.
"""
from __future__ import annotations

import math

_CHANNEL_MAX = 255


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves going away from zero.

    Python's ``round`` uses banker's rounding (``round(2.5) == 2``); the
    device values are rounded the conventional way (``2.5 -> 3``).
    """
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def _clamp_channel(value: float) -> float:
    return max(0, min(_CHANNEL_MAX, value))


def rgb_to_hsl(red: float, green: float, blue: float) -> tuple[int, int, int]:
    """Convert an RGB colour to (hue, saturation, lightness).

    Channels are clamped to [0, 255]. Hue is returned in degrees [0, 360),
    saturation and lightness in percent [0, 100].
    """
    r = _clamp_channel(red) / _CHANNEL_MAX
    g = _clamp_channel(green) / _CHANNEL_MAX
    b = _clamp_channel(blue) / _CHANNEL_MAX

    low = min(r, g, b)
    high = max(r, g, b)

    chroma = high - low
    lightness = (high + low) / 2

    if chroma == 0:  # achromatic
        return 0, 0, round_half_up(100 * lightness)

    if high == r:
        hue = (g - b) / chroma
    elif high == g:
        hue = 2 + (b - r) / chroma
    else:
        hue = 4 + (r - g) / chroma
    hue *= 60
    if hue < 0:
        hue += 360

    saturation = (high - lightness) / min(lightness, 1 - lightness)

    return (
        round_half_up(hue) % 360,
        round_half_up(100 * saturation),
        round_half_up(100 * lightness),
    )
