#!/usr/bin/env python
"""Step Nanoleaf panels through a list of RGB colours."""
from __future__ import annotations

import argparse
import asyncio
import logging
import os

from picoleaf import const
from picoleaf.client import NanoleafClient

COLORS = [
    (255, 0, 0),
    (255, 128, 0),
    (255, 255, 0),
    (0, 255, 0),
    (0, 128, 128),
    (0, 0, 255),
    (255, 0, 255),
]


async def run(args: argparse.Namespace) -> None:
    """Run the colour cycle example."""
    client = NanoleafClient(args.host, args.token, verbose=args.verbose)
    await client.async_turn_on()

    for count in range(args.rounds * len(COLORS)):
        red, green, blue = COLORS[count % len(COLORS)]
        print(f"colour {count + 1}: rgb=({red}, {green}, {blue})")
        await client.async_set_rgb(red, green, blue)
        await asyncio.sleep(args.interval)


def parse_args() -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Cycle Nanoleaf panels through a few colours."
    )
    parser.add_argument(
        "--host",
        default=os.environ.get(const.ENV_HOST, "nanoleaf.local:16021"),
        help=f"Nanoleaf host[:port] (env: {const.ENV_HOST})",
    )
    parser.add_argument(
        "--token",
        default=os.environ.get(const.ENV_TOKEN),
        help=f"Nanoleaf access token (env: {const.ENV_TOKEN})",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=2.0,
        help="Seconds between colours",
    )
    parser.add_argument(
        "--rounds",
        type=int,
        default=1,
        help="Number of passes through the colour list",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log requests and responses",
    )
    args = parser.parse_args()
    if not args.token:
        parser.error(f"--token or {const.ENV_TOKEN} is required")
    return args


def main() -> None:
    """Entry point."""
    args = parse_args()
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    asyncio.run(run(args))


if __name__ == "__main__":
    main()
