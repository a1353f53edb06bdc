"""
Radar field: the ordered rings and the routing of items between them
"""

import dataclasses
import json
import logging
import os
import random
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from rippleradar.config import FieldConfig
from rippleradar.errors import (
    DuplicateKeyError,
    MissingDistanceError,
    NotFoundError,
    OutOfRangeError,
    PlacementError,
)
from rippleradar.geometry import Point
from rippleradar.item import Item
from rippleradar.ring import Occupant, Placement, Ring, Rotation

logger = logging.getLogger(__name__)


class RadarField:
    """
    Allocator placing items on concentric rings

    Each ring covers one half-open band of ``[min_distance, max_distance)``.
    An item is routed to the ring whose band contains its distance and then
    takes the free slot of that ring nearest its angle.

    The ring geometry is fixed once the field is built. Changing the layout
    means building a new field with ``configure``, ``from_config`` or
    ``reconfigure``; items are not carried over unless the caller re-adds them.
    """

    def __init__(
        self,
        rings: Sequence[Ring],
        config: FieldConfig,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self.rings: tuple = tuple(rings)
        self.rng = rng or random.Random(config.random_seed)

    @classmethod
    def configure(
        cls,
        ring_count: int,
        min_distance: float,
        max_distance: float,
        item_footprint: float,
        spacing: float,
        rng: Optional[random.Random] = None,
        **options: Any,
    ) -> "RadarField":
        """
        Build a field partitioning ``[min_distance, max_distance)`` into rings

        Args:
            ring_count: Number of distance bands
            min_distance: Lower bound of the first band
            max_distance: Upper bound (exclusive) of the last band
            item_footprint: Size taken by one item along a ring
            spacing: Gap between neighbouring items
            rng: Random source for fallback placement
            **options: Any other FieldConfig value (origin, ring_padding, ...)

        Returns:
            A new, empty RadarField
        """
        config = FieldConfig(
            ring_count=ring_count,
            min_distance=min_distance,
            max_distance=max_distance,
            item_footprint=item_footprint,
            spacing=spacing,
            **options,
        )
        return cls.from_config(config, rng=rng)

    @classmethod
    def from_config(
        cls, config: FieldConfig, rng: Optional[random.Random] = None
    ) -> "RadarField":
        """Build an empty field from a FieldConfig"""
        config.validate()
        # Own copy: later edits to the caller's config must not reach this field
        config = dataclasses.replace(config)
        rng = rng or random.Random(config.random_seed)
        origin = Point.from_value(config.origin)

        rings = []
        if config.ring_count > 0:
            width = (config.max_distance - config.min_distance) / config.ring_count
            for index in range(config.ring_count):
                low = config.min_distance + index * width
                high = (
                    config.max_distance
                    if index == config.ring_count - 1
                    else config.min_distance + (index + 1) * width
                )
                if low >= high:
                    continue

                radius = config.ring_radius(index)
                if config.max_ring_radius is not None and radius > config.max_ring_radius:
                    logger.info(
                        f"Ring {index + 1} radius {radius} exceeds max_ring_radius "
                        f"{config.max_ring_radius}, building {len(rings)} rings"
                    )
                    break

                rings.append(
                    Ring(
                        radius=radius,
                        origin=origin,
                        item_footprint=config.item_footprint,
                        spacing=config.spacing,
                        distance_interval=(low, high),
                        index=index,
                        rng=rng,
                        missing_angle_policy=config.missing_angle_policy,
                        angle_unit=config.angle_unit,
                    )
                )

        field = cls(rings, config, rng)
        logger.info(
            f"Configured radar field with {len(rings)} rings over "
            f"[{config.min_distance}, {config.max_distance}), capacity {field.capacity()}"
        )
        return field

    def reconfigure(self, rng: Optional[random.Random] = None, **changes: Any) -> "RadarField":
        """
        Build a new field with some configuration values changed

        This field is left untouched, occupants included.
        """
        return self.from_config(dataclasses.replace(self.config, **changes), rng=rng)

    def __len__(self) -> int:
        return self.occupancy()

    def __repr__(self) -> str:
        return (
            f"RadarField(rings={len(self.rings)}, "
            f"occupancy={self.occupancy()}/{self.capacity()})"
        )

    # Queries

    def capacity(self) -> int:
        """Total number of slots over all rings"""
        return sum(len(ring.all_slots) for ring in self.rings)

    def occupancy(self) -> int:
        """Number of items currently placed"""
        return sum(len(ring.occupants) for ring in self.rings)

    def ring(self, ring_index: int) -> Ring:
        """Ring at position ``ring_index`` in the field"""
        if ring_index < 0 or ring_index >= len(self.rings):
            raise IndexError(f"Ring index {ring_index} out of range (0..{len(self.rings) - 1})")
        return self.rings[ring_index]

    def occupants_of(self, ring_index: int) -> List[Item]:
        """Items on the ring at ``ring_index``, in insertion order"""
        return [occupant.item for occupant in self.ring(ring_index).occupants]

    def select_ring(self, distance: float) -> Optional[Ring]:
        """The ring whose distance interval contains ``distance``"""
        for ring in self.rings:
            if ring.contains_distance(distance):
                return ring
        return None

    def ring_of(self, key: str) -> Optional[Ring]:
        """The ring currently holding ``key``, found by occupancy"""
        for ring in self.rings:
            if ring.contains(key):
                return ring
        return None

    def contains(self, key: str) -> bool:
        return self.ring_of(key) is not None

    def lookup(self, key: str) -> Placement:
        """
        Placement of a placed item

        Raises:
            NotFoundError: the key is not placed
        """
        ring = self.ring_of(key)
        if ring is None:
            raise NotFoundError(key)
        return ring.placement(key)

    def items(self) -> List[Item]:
        """Every placed item, ring by ring"""
        return [occupant.item for ring in self.rings for occupant in ring.occupants]

    def placements(self) -> List[Placement]:
        """Placement of every placed item, ring by ring"""
        return [
            ring.placement(occupant.item.key)
            for ring in self.rings
            for occupant in ring.occupants
        ]

    # Mutations

    def _ring_for(self, item: Item) -> Ring:
        if item.distance is not None:
            ring = self.select_ring(item.distance)
            if ring is None:
                raise OutOfRangeError(
                    f"Distance {item.distance} of item '{item.key}' is outside "
                    f"[{self.config.min_distance}, {self.config.max_distance})",
                    item,
                )
            return ring

        policy = self.config.missing_distance_policy
        if policy == "reject":
            raise MissingDistanceError(f"Item '{item.key}' has no distance", item)
        if not self.rings:
            raise OutOfRangeError(f"No rings to place item '{item.key}' on", item)
        if policy == "random":
            return self.rings[self.rng.randrange(len(self.rings))]

        index = self.config.default_ring_index
        if index < 0 or index >= len(self.rings):
            raise OutOfRangeError(
                f"Default ring index {index} does not exist for item '{item.key}'", item
            )
        return self.rings[index]

    def add(self, item: Item) -> Placement:
        """
        Place an item on the field

        Args:
            item: Item to place; its distance and angle are read once, now

        Returns:
            Placement with the slot's screen-space point

        Raises:
            DuplicateKeyError: an item with the same key is already placed
            MissingDistanceError: the item has no distance and the field rejects those
            OutOfRangeError: no ring covers the item's distance
            RingFullError: the selected ring has no free slot
        """
        try:
            if self.contains(item.key):
                raise DuplicateKeyError(f"Item '{item.key}' is already placed", item)
            ring = self._ring_for(item)
            placement = ring.add(item)
        except PlacementError as e:
            logger.warning(f"Could not place item {item.key}: {str(e)}")
            raise

        logger.debug(
            f"Placed item {item.key} on ring {placement.ring_name} slot {placement.slot_index} "
            f"at ({placement.point.x:.2f}, {placement.point.y:.2f})"
        )
        return placement

    def add_many(self, items: Sequence[Item]) -> List[Union[Placement, PlacementError]]:
        """
        Place several items, collecting failures instead of stopping

        Returns:
            For each item, its Placement or the PlacementError it raised
        """
        results: List[Union[Placement, PlacementError]] = []
        for item in items:
            try:
                results.append(self.add(item))
            except PlacementError as e:
                results.append(e)
        return results

    def remove(self, key: str) -> Occupant:
        """
        Remove a placed item

        The owning ring is found by occupancy, so an item whose distance has
        changed since it was added is still found where it lives.

        Raises:
            NotFoundError: the key is not placed
        """
        ring = self.ring_of(key)
        if ring is None:
            logger.warning(f"Cannot remove item {key}: not placed")
            raise NotFoundError(key)
        return ring.remove(key)

    def clear(self) -> None:
        """Remove every item from every ring"""
        for ring in self.rings:
            ring.clear()
        logger.debug("Cleared radar field")

    def rotate(self, by_degrees: float, duration: float = 0.0) -> List[Rotation]:
        """Rotate the rendered position of every occupant of every ring"""
        rotations = []
        for ring in self.rings:
            rotations.extend(ring.rotate(by_degrees, duration))
        return rotations

    # Statistics

    def get_ring_stats(self) -> List[Dict[str, Any]]:
        """Get statistics for each ring"""
        return [ring.stats() for ring in self.rings]

    def log_field_status(self) -> None:
        """Log current occupancy of all rings"""
        logger.info(f"Radar field: {self.occupancy()}/{self.capacity()} slots used")
        for stat in self.get_ring_stats():
            low, high = stat["distance_interval"]
            logger.info(
                f"  Ring {stat['name']}: radius={stat['radius']:.1f}, "
                f"distance=[{low:.1f}, {high:.1f}), {stat['occupancy']}/{stat['capacity']} slots"
            )

    # Persistence

    def to_dict(self) -> Dict[str, Any]:
        """Configuration plus every occupant and its slot"""
        config = dataclasses.asdict(self.config)
        config["origin"] = list(config["origin"])
        return {
            "config": config,
            "occupants": [
                {
                    "ring_index": ring.index,
                    "slot_index": occupant.slot_index,
                    "item": occupant.item.to_dict(),
                }
                for ring in self.rings
                for occupant in ring.occupants
            ],
        }

    def save(self, path: Union[str, Path]) -> None:
        """
        Save the field to a JSON file

        Item payloads must be JSON serializable.
        """
        directory = os.path.dirname(os.fspath(path))
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info(f"Saved radar field with {self.occupancy()} items to {path}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any], rng: Optional[random.Random] = None) -> "RadarField":
        """Rebuild a field and put every occupant back on its saved slot"""
        config_dict = dict(data.get("config", {}))
        if "origin" in config_dict:
            config_dict["origin"] = tuple(config_dict["origin"])
        field = cls.from_config(FieldConfig(**config_dict), rng=rng)

        rings_by_index = {ring.index: ring for ring in field.rings}
        for entry in data.get("occupants", []):
            item = Item.from_dict(entry["item"])
            ring = rings_by_index.get(entry["ring_index"])
            if ring is None:
                logger.warning(
                    f"Skipping item {item.key}: ring {entry['ring_index']} is not configured"
                )
                continue
            try:
                ring.restore(item, entry["slot_index"])
            except PlacementError as e:
                logger.warning(f"Skipping item {item.key}: {str(e)}")

        return field

    @classmethod
    def load(cls, path: Union[str, Path], rng: Optional[random.Random] = None) -> "RadarField":
        """Load a field saved with ``save``"""
        with open(path, "r") as f:
            data = json.load(f)

        field = cls.from_dict(data, rng=rng)
        logger.info(f"Loaded radar field with {field.occupancy()} items from {path}")
        return field
