"""
Concentric ring with a fixed layout of item slots
"""

import logging
import math
import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from rippleradar.errors import (
    DuplicateKeyError,
    InvalidGeometryError,
    NotFoundError,
    OutOfRangeError,
    RingFullError,
)
from rippleradar.geometry import (
    ORIGIN,
    Point,
    angle_of_point,
    arc_points,
    nearest_index,
    point_on_circle,
    slot_angles,
    to_radians,
)
from rippleradar.item import Item, ItemSnapshot
from rippleradar.ring_model import RingModel

logger = logging.getLogger(__name__)

MISSING_ANGLE_POLICIES = ("random", "first")


@dataclass(frozen=True)
class Occupant:
    """An item assigned to a slot of a ring"""

    slot_index: int
    item: Item
    snapshot: ItemSnapshot
    point: Point


@dataclass(frozen=True)
class Placement:
    """Where an item ended up: the ring, the slot and its screen-space point"""

    ring_index: int
    ring_name: str
    slot_index: int
    point: Point
    item: Item


@dataclass(frozen=True)
class Rotation:
    """New angular position of one occupant after a rotation"""

    key: str
    slot_index: int
    start_angle: float  # degrees
    end_angle: float  # degrees
    start_point: Point
    end_point: Point
    origin: Point
    radius: float
    duration: float = 0.0

    def path(self, samples: int = 16) -> List[Point]:
        """Points along the arc from the start to the end position"""
        return arc_points(
            self.origin, self.radius, self.start_angle, self.end_angle - self.start_angle, samples
        )


class Ring:
    """
    A circle around the radar center partitioned into equally spaced slots

    The slot layout is computed once from the radius, the item footprint and
    the spacing between items. Only occupancy changes afterwards: every slot
    is either available or held by exactly one occupant.
    """

    def __init__(
        self,
        radius: float,
        origin: Point = ORIGIN,
        item_footprint: float = 18.0,
        spacing: float = 10.0,
        distance_interval: Tuple[float, float] = (0.0, math.inf),
        index: int = 0,
        name: Optional[str] = None,
        rng: Optional[random.Random] = None,
        missing_angle_policy: str = "random",
        angle_unit: str = "degrees",
    ):
        if radius < 0:
            raise InvalidGeometryError(f"Illegal radius value {radius}")
        if item_footprint + spacing / 2 <= 0:
            raise InvalidGeometryError(
                f"Item footprint {item_footprint} with spacing {spacing} leaves no room per item"
            )
        if missing_angle_policy not in MISSING_ANGLE_POLICIES:
            raise InvalidGeometryError(f"Unknown missing angle policy '{missing_angle_policy}'")

        self.index = index
        self.name = name or f"C{index + 1}"
        self.radius = float(radius)
        self.origin = Point.from_value(origin)
        self.item_footprint = float(item_footprint)
        self.spacing = float(spacing)
        self.distance_interval = (float(distance_interval[0]), float(distance_interval[1]))
        self.missing_angle_policy = missing_angle_policy
        self.angle_unit = angle_unit
        self.rng = rng or random.Random()

        self.all_slots: Tuple[Point, ...] = self._find_possible_positions()

        # Indices into all_slots that are free, in the order they are scanned
        self._available: List[int] = list(range(len(self.all_slots)))
        self.occupants: List[Occupant] = []
        self.model = RingModel()

        # Rendered angular position of each occupant, moved only by rotate()
        self._rendered_angles: Dict[str, float] = {}

    def _find_possible_positions(self) -> Tuple[Point, ...]:
        # capacity = 2πr / (footprint + spacing / 2)
        circumference = 2 * math.pi * self.radius
        capacity = int(math.floor(circumference / (self.item_footprint + self.spacing / 2)))
        return tuple(
            point_on_circle(angle, self.origin, self.radius) for angle in slot_angles(capacity)
        )

    @property
    def capacity(self) -> int:
        return len(self.all_slots)

    @property
    def available_slots(self) -> List[Point]:
        """Points not currently assigned to an occupant"""
        return [self.all_slots[i] for i in self._available]

    @property
    def is_full(self) -> bool:
        return not self._available

    def __len__(self) -> int:
        return len(self.occupants)

    def __repr__(self) -> str:
        return (
            f"Ring(name={self.name!r}, radius={self.radius}, "
            f"interval={self.distance_interval}, occupancy={len(self)}/{self.capacity})"
        )

    def contains_distance(self, distance: float) -> bool:
        """Whether ``distance`` falls in this ring's half-open interval"""
        low, high = self.distance_interval
        return low <= distance < high

    def contains(self, key: str) -> bool:
        return key in self.model

    def occupant(self, key: str) -> Optional[Occupant]:
        for occupant in self.occupants:
            if occupant.item.key == key:
                return occupant
        return None

    def occupied_slot_indices(self) -> List[int]:
        return [occupant.slot_index for occupant in self.occupants]

    def resolve_slot(self, item: Item) -> Optional[int]:
        """
        Choose a slot for an item

        With an angle, the available slot nearest the item's ideal point on
        the circle wins. Without one, the missing angle policy decides.

        Args:
            item: Item to place

        Returns:
            Index into ``available_slots`` or None if the ring is full
        """
        if not self._available:
            return None

        if item.angle is None:
            if self.missing_angle_policy == "first":
                return 0
            return self.rng.randrange(len(self._available))

        ideal = point_on_circle(to_radians(item.angle, self.angle_unit), self.origin, self.radius)
        return nearest_index(self.available_slots, ideal)

    def add(self, item: Item) -> Placement:
        """
        Assign an item to a free slot

        Args:
            item: Item to add

        Returns:
            Placement of the item

        Raises:
            DuplicateKeyError: the key is already on this ring
            OutOfRangeError: the item's distance is outside the ring's interval
            RingFullError: no slot is available
        """
        if item.key in self.model:
            raise DuplicateKeyError(f"Item '{item.key}' is already on ring {self.name}", item)

        if item.distance is not None and not self.contains_distance(item.distance):
            raise OutOfRangeError(
                f"Distance {item.distance} of item '{item.key}' is outside "
                f"[{self.distance_interval[0]}, {self.distance_interval[1]}) of ring {self.name}",
                item,
            )

        available_index = self.resolve_slot(item)
        if available_index is None:
            raise RingFullError(
                f"There is no available room for item '{item.key}' in ring {self.name}",
                item,
                ring_name=self.name,
            )

        return self._assign(item, available_index)

    def restore(self, item: Item, slot_index: int) -> Placement:
        """
        Put an item back on a specific slot, e.g. when loading a saved field

        Raises:
            DuplicateKeyError: the key is already on this ring
            RingFullError: the slot is out of range or already taken
        """
        if item.key in self.model:
            raise DuplicateKeyError(f"Item '{item.key}' is already on ring {self.name}", item)
        if slot_index not in self._available:
            raise RingFullError(
                f"Slot {slot_index} of ring {self.name} is not available for item '{item.key}'",
                item,
                ring_name=self.name,
            )
        return self._assign(item, self._available.index(slot_index))

    def _assign(self, item: Item, available_index: int) -> Placement:
        slot_index = self._available.pop(available_index)
        point = self.all_slots[slot_index]
        self.occupants.append(Occupant(slot_index, item, item.snapshot(), point))
        self.model.add(item)
        self._rendered_angles[item.key] = angle_of_point(point, self.origin)

        logger.debug(f"Added item {item.key} to ring {self.name} at slot {slot_index}")
        return Placement(self.index, self.name, slot_index, point, item)

    def placement(self, key: str) -> Placement:
        """Placement of the occupant with ``key``"""
        occupant = self.occupant(key)
        if occupant is None:
            raise NotFoundError(key)
        return Placement(self.index, self.name, occupant.slot_index, occupant.point, occupant.item)

    def remove(self, key: str) -> Occupant:
        """
        Free the slot held by ``key``

        The slot goes back to the end of the available slots.

        Raises:
            NotFoundError: no occupant has that key
        """
        for position, occupant in enumerate(self.occupants):
            if occupant.item.key == key:
                break
        else:
            raise NotFoundError(key)

        del self.occupants[position]
        self._available.append(occupant.slot_index)
        self.model.remove(occupant.item)
        self._rendered_angles.pop(key, None)

        logger.debug(f"Removed item {key} from ring {self.name}, slot {occupant.slot_index} freed")
        return occupant

    def clear(self) -> None:
        """Remove every occupant and restore the original slot order"""
        self.occupants.clear()
        self.model.clear()
        self._rendered_angles.clear()
        self._available = list(range(len(self.all_slots)))

    def rendered_angle(self, key: str) -> float:
        """Current rendered angular position (degrees) of an occupant"""
        if key not in self._rendered_angles:
            raise NotFoundError(key)
        return self._rendered_angles[key]

    def rendered_point(self, key: str) -> Point:
        """Current rendered position of an occupant"""
        angle = self.rendered_angle(key)
        return point_on_circle(math.radians(angle), self.origin, self.radius)

    def rotate(self, by_degrees: float, duration: float = 0.0) -> List[Rotation]:
        """
        Rotate the rendered position of every occupant around the origin

        Slot assignments are left untouched: only the positions reported by
        ``rendered_point`` move.

        Args:
            by_degrees: Signed rotation in degrees
            duration: Duration hint passed through to the presentation layer

        Returns:
            One Rotation per occupant, in occupant order
        """
        rotations = []
        for occupant in self.occupants:
            key = occupant.item.key
            start_angle = self._rendered_angles[key]
            start_point = point_on_circle(math.radians(start_angle), self.origin, self.radius)
            end_angle = start_angle + by_degrees
            end_point = point_on_circle(math.radians(end_angle), self.origin, self.radius)
            rendered = end_angle % 360.0
            # tiny negative angles wrap to exactly 360.0
            if rendered >= 360.0:
                rendered -= 360.0
            self._rendered_angles[key] = rendered
            rotations.append(
                Rotation(
                    key=key,
                    slot_index=occupant.slot_index,
                    start_angle=start_angle,
                    end_angle=end_angle,
                    start_point=start_point,
                    end_point=end_point,
                    origin=self.origin,
                    radius=self.radius,
                    duration=duration,
                )
            )
        return rotations

    def stats(self) -> Dict[str, Any]:
        """Occupancy statistics for this ring"""
        return {
            "ring": self.index,
            "name": self.name,
            "radius": self.radius,
            "distance_interval": list(self.distance_interval),
            "capacity": self.capacity,
            "occupancy": len(self.occupants),
            "available": len(self._available),
        }
