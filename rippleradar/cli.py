"""
Command-line interface for RippleRadar
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

import yaml

from rippleradar.config import load_config
from rippleradar.errors import RadarError
from rippleradar.field import RadarField
from rippleradar.item import Item
from rippleradar.utils.format_utils import format_result, format_ring_stats
from rippleradar.utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments"""
    parser = argparse.ArgumentParser(description="RippleRadar - place items on concentric rings")

    parser.add_argument(
        "items_file", help="YAML or JSON file with a list of items (key, payload, distance, angle)"
    )

    parser.add_argument("--config", "-c", help="Path to configuration file (YAML)", default=None)

    parser.add_argument("--rings", "-r", help="Number of rings", type=int, default=None)

    parser.add_argument("--min-distance", help="Lower distance bound", type=float, default=None)

    parser.add_argument("--max-distance", help="Upper distance bound", type=float, default=None)

    parser.add_argument(
        "--seed", "-s", help="Random seed for fallback placement", type=int, default=None
    )

    parser.add_argument(
        "--output", "-o", help="Write the resulting field to this JSON file", default=None
    )

    parser.add_argument(
        "--log-level",
        "-l",
        help="Logging level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
    )

    return parser.parse_args(argv)


def load_items(path: str) -> List[Item]:
    """
    Load items from a YAML or JSON file

    The file holds either a list of item mappings or a mapping with an
    ``items`` list.
    """
    with open(path, "r") as f:
        data = yaml.safe_load(f) or []

    if isinstance(data, dict):
        data = data.get("items", [])
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of items in {path}")

    return [Item.from_dict(entry) for entry in data]


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point

    Returns:
        Exit code
    """
    args = parse_args(argv)

    if not os.path.exists(args.items_file):
        print(f"Error: Items file '{args.items_file}' not found")
        return 1

    try:
        config = load_config(args.config)
    except (OSError, TypeError, ValueError, yaml.YAMLError) as e:
        print(f"Error: Could not load config: {str(e)}")
        return 1

    # Apply command-line overrides
    if args.rings is not None:
        config.radar.ring_count = args.rings
    if args.min_distance is not None:
        config.radar.min_distance = args.min_distance
    if args.max_distance is not None:
        config.radar.max_distance = args.max_distance
    if args.seed is not None:
        config.radar.random_seed = args.seed

    setup_logging(config, args.log_level)

    try:
        items = load_items(args.items_file)
        field = RadarField.from_config(config.radar)
    except (OSError, TypeError, ValueError, KeyError, yaml.YAMLError, RadarError) as e:
        print(f"Error: {str(e)}")
        return 1

    for result in field.add_many(items):
        print(format_result(result))

    print(f"\nPlaced {field.occupancy()} of {len(items)} items, capacity {field.capacity()}")
    print(format_ring_stats(field.get_ring_stats()))

    if args.output:
        try:
            field.save(args.output)
        except (OSError, TypeError) as e:
            print(f"Error: Could not save field: {str(e)}")
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
