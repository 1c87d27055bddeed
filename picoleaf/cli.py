"""Command-line interface for Nanoleaf panels."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Callable, Sequence

from picoleaf import __version__, const
from picoleaf.client import NanoleafClient, NanoleafError
from picoleaf.config import load_config

_LOGGER = logging.getLogger(__name__)

# Preset used by the ``red`` command.
_RED_BRIGHTNESS = 60


def _bounded_int(low: int, high: int) -> Callable[[str], int]:
    def parse(value: str) -> int:
        try:
            number = int(value)
        except ValueError as err:
            raise argparse.ArgumentTypeError(f"{value!r} is not an integer") from err
        if not low <= number <= high:
            raise argparse.ArgumentTypeError(
                f"{number} is outside the range {low}-{high}"
            )
        return number

    return parse


_percent = _bounded_int(0, 100)
_degrees = _bounded_int(0, 359)
_channel = _bounded_int(0, 255)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="picoleaf",
        description="Control Nanoleaf panels over the local REST API.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help=f"Log requests and responses (env: {const.ENV_VERBOSE})",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Config file (default: ~/{const.DEFAULT_CONFIG_FILE}, "
        f"env: {const.ENV_CONFIG})",
    )
    parser.add_argument("--version", action="version", version=__version__)

    sub = parser.add_subparsers(dest="command", metavar="command", required=True)
    sub.add_parser("on", help="Turn the panels on")
    sub.add_parser("off", help="Turn the panels off")
    sub.add_parser("white", help="Set white light (6500K)")
    sub.add_parser("red", help="Set solid red")
    sub.add_parser("info", help="Show panel info")

    brightness = sub.add_parser("brightness", help="Set brightness (0-100)")
    brightness.add_argument("value", type=_percent)
    brightness.add_argument(
        "--duration", type=int, default=None, help="Fade time in seconds"
    )

    temp = sub.add_parser("temp", help="Set colour temperature in kelvin")
    temp.add_argument("kelvin", type=int)

    hsl = sub.add_parser("hsl", help="Set hue (0-359), saturation and lightness")
    hsl.add_argument("hue", type=_degrees)
    hsl.add_argument("sat", type=_percent)
    hsl.add_argument("lightness", type=_percent)

    rgb = sub.add_parser("rgb", help="Set colour from RGB (0-255 each)")
    rgb.add_argument("red", type=_channel)
    rgb.add_argument("green", type=_channel)
    rgb.add_argument("blue", type=_channel)

    effect = sub.add_parser("effect", help="List or select effects")
    effect_sub = effect.add_subparsers(
        dest="effect_command", metavar="effect_command", required=True
    )
    effect_sub.add_parser("list", help="List effect names")
    select = effect_sub.add_parser("select", help="Activate an effect")
    select.add_argument("name")

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    return build_parser().parse_args(argv)


async def run(args: argparse.Namespace, client: NanoleafClient) -> None:
    """Run the selected command against ``client``."""
    command = args.command
    if command == "on":
        await client.async_turn_on()
    elif command == "off":
        await client.async_turn_off()
    elif command == "white":
        await client.async_set_color_temperature(const.DEFAULT_WHITE_TEMPERATURE)
    elif command == "red":
        await client.async_set_hsl(0, 100, _RED_BRIGHTNESS)
    elif command == "brightness":
        await client.async_set_brightness(args.value, duration=args.duration)
    elif command == "temp":
        await client.async_set_color_temperature(args.kelvin)
    elif command == "hsl":
        await client.async_set_hsl(args.hue, args.sat, args.lightness)
    elif command == "rgb":
        await client.async_set_rgb(args.red, args.green, args.blue)
    elif command == "info":
        info = await client.async_get_panel_info()
        state = info.state
        print(f"Name:       {info.name}")
        print(f"Model:      {info.model}")
        print(f"Serial:     {info.serial_no}")
        print(f"Firmware:   {info.firmware_version}")
        print(f"Panels:     {info.panel_layout.num_panels}")
        if state.on is not None:
            print(f"On:         {'yes' if state.on.value else 'no'}")
        if state.brightness is not None:
            print(f"Brightness: {state.brightness.value}")
        if info.effects.selected:
            print(f"Effect:     {info.effects.selected}")
    elif command == "effect":
        if args.effect_command == "list":
            for name in await client.async_list_effects():
                print(name)
        else:
            await client.async_select_effect(args.name)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point."""
    args = parse_args(argv)
    try:
        config = load_config(args.config)
    except NanoleafError as err:
        print(f"picoleaf: {err}", file=sys.stderr)
        return 1

    verbose = args.verbose or config.verbose
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
    )
    _LOGGER.info("Host: %s", config.host)

    client = NanoleafClient(config.host, config.token, verbose=verbose)
    try:
        asyncio.run(run(args, client))
    except NanoleafError as err:
        print(f"picoleaf: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
