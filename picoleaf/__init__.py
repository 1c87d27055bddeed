"""Picoleaf client package.

A Python library and command-line tool for controlling Nanoleaf light
panels over their local REST API.

Supports:
- Power on/off, brightness and colour temperature
- Hue/saturation and RGB colour (converted to HSL for the device)
- Effect listing and selection
- Panel info (layout, rhythm module, firmware)
"""

__version__ = "0.1.0"
