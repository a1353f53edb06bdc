"""
Tests for RadarPresenter in rippleradar.presenter
"""

import unittest
from unittest.mock import MagicMock

from rippleradar.config import PresentationConfig
from rippleradar.errors import NotFoundError, OutOfRangeError, RingFullError
from rippleradar.field import RadarField
from rippleradar.item import Item
from rippleradar.presenter import DiskVisual, RadarPresenter


class FakeView:
    """Stand-in for a toolkit view"""

    def __init__(self, key):
        self.key = key
        self.center = None


class TestRadarPresenter(unittest.TestCase):
    """Tests for binding visuals to placements"""

    def setUp(self):
        self.field = RadarField.configure(2, 0.0, 100.0, 5.0, 2.0, random_seed=3)

    def test_default_visual(self):
        """Test that a disk is used when no view factory is given"""
        presenter = RadarPresenter(self.field)
        placement = presenter.add(Item("a", distance=10.0, angle=0.0))

        visual = presenter.visual_for("a")
        self.assertIsInstance(visual, DiskVisual)
        self.assertEqual(visual.center, placement.point)
        self.assertEqual(visual.radius, 18.0)

    def test_view_factory(self):
        """Test that the view factory receives the item and preferred size"""
        factory = MagicMock(side_effect=lambda item, size: FakeView(item.key))
        presenter = RadarPresenter(
            self.field, view_factory=factory, config=PresentationConfig(item_radius=10.0)
        )
        item = Item("a", distance=60.0, angle=90.0)

        placement = presenter.add(item)

        factory.assert_called_once_with(item, (20.0, 20.0))
        visual = presenter.visual_for("a")
        self.assertIsInstance(visual, FakeView)
        self.assertEqual(visual.center, placement.point)

    def test_factory_not_called_on_failure(self):
        """Test that rejected items get no visual"""
        factory = MagicMock()
        presenter = RadarPresenter(self.field, view_factory=factory)

        with self.assertRaises(OutOfRangeError):
            presenter.add(Item("a", distance=500.0))
        factory.assert_not_called()
        with self.assertRaises(NotFoundError):
            presenter.visual_for("a")

    def test_factory_error_leaves_field_unchanged(self):
        """Test that an item whose visual cannot be built is not left placed"""
        factory = MagicMock(side_effect=RuntimeError("no view"))
        presenter = RadarPresenter(self.field, view_factory=factory)

        with self.assertRaises(RuntimeError):
            presenter.add(Item("a", distance=10.0, angle=0.0))

        self.assertFalse(self.field.contains("a"))
        self.assertEqual(self.field.occupancy(), 0)
        with self.assertRaises(NotFoundError):
            presenter.visual_for("a")

        # The slot is free again
        factory.side_effect = lambda item, size: FakeView(item.key)
        placement = presenter.add(Item("a", distance=10.0, angle=0.0))
        self.assertEqual(placement.slot_index, 0)

    def test_remove(self):
        """Test that removal hands back the visual"""
        presenter = RadarPresenter(self.field)
        presenter.add(Item("a", distance=10.0))

        visual = presenter.remove("a")
        self.assertEqual(visual.key, "a")
        self.assertEqual(self.field.occupancy(), 0)
        with self.assertRaises(NotFoundError):
            presenter.remove("a")

    def test_add_items(self):
        """Test batch placement through the presenter"""
        field = RadarField.configure(1, 0.0, 10.0, 5.0, 2.0, disk_radius=0.0, ring_padding=10.0)
        presenter = RadarPresenter(field)

        results = presenter.add_items([Item(f"item{i}", distance=1.0) for i in range(11)])

        self.assertIsInstance(results[-1], RingFullError)
        self.assertEqual(len(presenter.visuals), 10)

    def test_rotate_moves_visuals(self):
        """Test that rotation moves visuals to their end points"""
        presenter = RadarPresenter(self.field)
        presenter.add(Item("a", distance=10.0, angle=0.0))

        rotations = presenter.rotate(90.0)

        self.assertEqual(rotations[0].duration, 1.5)
        visual = presenter.visual_for("a")
        self.assertAlmostEqual(visual.center.x, 0.0)
        self.assertAlmostEqual(visual.center.y, 48.0)

    def test_reconfigure_readds_items(self):
        """Test that reconfiguration re-adds items on the new layout"""
        presenter = RadarPresenter(self.field)
        presenter.add(Item("a", distance=10.0, angle=0.0))
        presenter.add(Item("b", distance=90.0, angle=180.0))
        old_field = presenter.field

        results = presenter.reconfigure(ring_count=4)

        self.assertIsNot(presenter.field, old_field)
        self.assertEqual(len(presenter.field.rings), 4)
        self.assertEqual([r.ring_index for r in results], [0, 3])
        self.assertEqual(presenter.field.occupancy(), 2)
        self.assertEqual(set(presenter.visuals), {"a", "b"})

    def test_reconfigure_drops_items_out_of_range(self):
        """Test that items no longer covered are dropped with their visuals"""
        presenter = RadarPresenter(self.field)
        presenter.add(Item("a", distance=10.0))
        presenter.add(Item("b", distance=90.0))

        with self.assertLogs("rippleradar.presenter", level="WARNING"):
            results = presenter.reconfigure(max_distance=50.0)

        self.assertIsInstance(results[1], OutOfRangeError)
        self.assertEqual(set(presenter.visuals), {"a"})

    def test_clear(self):
        """Test clearing the field and visuals"""
        presenter = RadarPresenter(self.field)
        presenter.add(Item("a", distance=10.0))
        presenter.clear()

        self.assertEqual(presenter.visuals, {})
        self.assertEqual(self.field.occupancy(), 0)


if __name__ == "__main__":
    unittest.main()
