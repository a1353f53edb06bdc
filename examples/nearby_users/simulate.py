"""
Nearby users moving around a radar

Places the users from items.yaml, then simulates a few location updates:
each update removes a user and adds it back with its new distance and angle,
which is how callers keep the field in sync with live measurements.

Usage:
    python simulate.py [--steps N]
"""

import argparse
import logging
import os
import random

from rippleradar import RadarField, RadarPresenter, load_config
from rippleradar.cli import load_items
from rippleradar.errors import PlacementError
from rippleradar.utils import format_placement, format_result, setup_logging

logger = logging.getLogger(__name__)

HERE = os.path.dirname(os.path.abspath(__file__))


def move(item, rng: random.Random) -> None:
    """Nudge an item's distance and angle"""
    if item.distance is not None:
        item.distance = max(0.0, item.distance + rng.uniform(-60.0, 60.0))
    if item.angle is not None:
        item.angle = (item.angle + rng.uniform(-20.0, 20.0)) % 360.0


def main() -> None:
    parser = argparse.ArgumentParser(description="Simulate nearby users on a radar")
    parser.add_argument("--steps", type=int, default=3, help="Number of location updates")
    args = parser.parse_args()

    config = load_config(os.path.join(HERE, "config.yaml"))
    setup_logging(config)

    presenter = RadarPresenter(RadarField.from_config(config.radar), config=config.presentation)
    items = load_items(os.path.join(HERE, "items.yaml"))

    for result in presenter.add_items(items):
        print(format_result(result))
    presenter.field.log_field_status()

    rng = random.Random(config.radar.random_seed)
    for step in range(args.steps):
        print(f"\nUpdate {step + 1}")
        for item in items:
            move(item, rng)
            if presenter.field.contains(item.key):
                presenter.remove(item.key)
            try:
                print(format_placement(presenter.add(item)))
            except PlacementError as e:
                print(format_result(e))

    rotations = presenter.rotate(45.0)
    print(f"\nRotated {len(rotations)} users by 45 degrees")
    presenter.field.log_field_status()


if __name__ == "__main__":
    main()
