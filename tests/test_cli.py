"""
Tests for the command-line interface and formatting helpers
"""

import io
import json
import logging
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

import yaml

from rippleradar.cli import load_items, main
from rippleradar.errors import RingFullError
from rippleradar.geometry import Point
from rippleradar.item import Item
from rippleradar.ring import Placement
from rippleradar.utils.format_utils import format_placement, format_result, format_ring_stats


class TestCli(unittest.TestCase):
    """Tests for running placements from the command line"""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.items_path = os.path.join(self.test_dir, "items.yaml")
        with open(self.items_path, "w") as f:
            yaml.dump(
                [
                    {"key": "alice", "distance": 12.0, "angle": 0.0, "payload": {"name": "Alice"}},
                    {"key": "bob", "distance": 640.0, "angle": 90.0},
                    {"key": "carol", "distance": 5000.0},
                ],
                f,
            )
        self.root_handlers = list(logging.getLogger().handlers)
        self.root_level = logging.getLogger().level

    def tearDown(self):
        root_logger = logging.getLogger()
        for handler in list(root_logger.handlers):
            if handler not in self.root_handlers:
                root_logger.removeHandler(handler)
                handler.close()
        root_logger.setLevel(self.root_level)
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def run_main(self, argv):
        with patch("sys.stdout", new_callable=io.StringIO) as stdout:
            code = main(argv)
        return code, stdout.getvalue()

    def test_load_items(self):
        """Test reading items from YAML"""
        items = load_items(self.items_path)
        self.assertEqual([item.key for item in items], ["alice", "bob", "carol"])
        self.assertEqual(items[0].payload, {"name": "Alice"})

    def test_load_items_mapping(self):
        """Test reading items from a JSON mapping with an items list"""
        path = os.path.join(self.test_dir, "items.json")
        with open(path, "w") as f:
            json.dump({"items": [{"key": "x", "distance": 1.0}]}, f)

        self.assertEqual(load_items(path), [Item("x")])

    def test_main(self):
        """Test placing items and saving the field"""
        output = os.path.join(self.test_dir, "field.json")

        code, stdout = self.run_main(
            [self.items_path, "--seed", "1", "--output", output, "--log-level", "ERROR"]
        )

        self.assertEqual(code, 0)
        self.assertIn("alice: ring C1 slot 0", stdout)
        self.assertIn("bob: ring C2", stdout)
        self.assertIn("carol: OutOfRangeError", stdout)
        self.assertIn("Placed 2 of 3 items", stdout)

        with open(output, "r") as f:
            data = json.load(f)
        self.assertEqual(len(data["occupants"]), 2)
        self.assertEqual(data["config"]["random_seed"], 1)

    def test_main_overrides(self):
        """Test command-line overrides of the ring layout"""
        code, stdout = self.run_main(
            [self.items_path, "--rings", "1", "--max-distance", "6000", "--log-level", "ERROR"]
        )

        self.assertEqual(code, 0)
        self.assertIn("Placed 3 of 3 items", stdout)

    def test_main_missing_file(self):
        """Test that a missing items file is reported"""
        code, stdout = self.run_main([os.path.join(self.test_dir, "nope.yaml")])

        self.assertEqual(code, 1)
        self.assertIn("not found", stdout)

    def test_main_invalid_layout(self):
        """Test that an invalid layout is reported"""
        code, stdout = self.run_main(
            [self.items_path, "--min-distance", "10", "--max-distance", "5", "--log-level", "ERROR"]
        )

        self.assertEqual(code, 1)
        self.assertIn("Error", stdout)

    def test_main_unknown_config_key(self):
        """Test that a config with an unknown setting is reported"""
        config_path = os.path.join(self.test_dir, "config.yaml")
        with open(config_path, "w") as f:
            yaml.dump({"radar": {"ringcount": 2}}, f)

        code, stdout = self.run_main([self.items_path, "--config", config_path])

        self.assertEqual(code, 1)
        self.assertIn("Could not load config", stdout)

    def test_main_broken_config(self):
        """Test that unparsable YAML in the config is reported"""
        config_path = os.path.join(self.test_dir, "config.yaml")
        with open(config_path, "w") as f:
            f.write("radar: [ring_count: 2\n")

        code, stdout = self.run_main([self.items_path, "--config", config_path])

        self.assertEqual(code, 1)
        self.assertIn("Could not load config", stdout)

    def test_main_non_numeric_distance(self):
        """Test that an item with a non-numeric distance is reported"""
        with open(self.items_path, "w") as f:
            yaml.dump([{"key": "alice", "distance": "far"}], f)

        code, stdout = self.run_main([self.items_path, "--log-level", "ERROR"])

        self.assertEqual(code, 1)
        self.assertIn("Error", stdout)


class TestFormatUtils(unittest.TestCase):
    """Tests for formatting helpers"""

    def test_format_placement(self):
        """Test formatting a placement"""
        placement = Placement(0, "C1", 3, Point(1.0, 2.5), Item("a"))
        self.assertEqual(format_placement(placement), "a: ring C1 slot 3 at (1.00, 2.50)")
        self.assertEqual(format_result(placement), format_placement(placement))

    def test_format_error(self):
        """Test formatting a placement error"""
        error = RingFullError("no room", Item("a"), ring_name="C2")
        self.assertEqual(format_result(error), "a: RingFullError: no room")

    def test_format_ring_stats(self):
        """Test formatting ring statistics"""
        self.assertEqual(format_ring_stats([]), "(no rings)")
        text = format_ring_stats(
            [
                {
                    "name": "C1",
                    "radius": 48.0,
                    "distance_interval": [0.0, 50.0],
                    "occupancy": 1,
                    "capacity": 50,
                }
            ]
        )
        self.assertIn("C1", text)
        self.assertIn("1/50", text)


if __name__ == "__main__":
    unittest.main()
