"""
Polar and Cartesian geometry helpers for ring layouts
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

ANGLE_UNITS = ("degrees", "radians")


@dataclass(frozen=True)
class Point:
    """A point in 2D screen space"""

    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point"""
        return math.hypot(self.x - other.x, self.y - other.y)

    @classmethod
    def from_value(cls, value) -> "Point":
        """Build a point from a Point, a mapping with x/y, or an (x, y) pair"""
        if isinstance(value, Point):
            return value
        if isinstance(value, dict):
            return cls(float(value["x"]), float(value["y"]))
        x, y = value
        return cls(float(x), float(y))


ORIGIN = Point(0.0, 0.0)


def point_on_circle(angle: float, origin: Point, radius: float) -> Point:
    """
    Given an angle, return the coordinates of the point on the circle

    Args:
        angle: Angle in radians
        origin: Center of the circle
        radius: Radius of the circle

    Returns:
        Point on the circumference
    """
    x = radius * math.cos(angle) + origin.x
    y = radius * math.sin(angle) + origin.y
    return Point(x, y)


def angle_of_point(point: Point, origin: Point) -> float:
    """
    Angle of a point around an origin

    Args:
        point: Point on (or off) the circle
        origin: Center of the circle

    Returns:
        Angle in degrees, normalized into [0, 360)
    """
    degrees = math.degrees(math.atan2(point.y - origin.y, point.x - origin.x))
    if degrees < 0:
        degrees += 360.0
    # -0.0 and values that round up to 360 after the shift
    if degrees >= 360.0:
        degrees -= 360.0
    return degrees


def to_radians(angle: float, unit: str = "degrees") -> float:
    """Convert an angle expressed in ``unit`` to radians"""
    if unit == "degrees":
        return math.radians(angle)
    return angle


def from_radians(angle: float, unit: str = "degrees") -> float:
    """Convert an angle in radians to ``unit``"""
    if unit == "degrees":
        return math.degrees(angle)
    return angle


def slot_angles(capacity: int) -> List[float]:
    """Equally spaced angles (radians) for ``capacity`` slots, starting at 0"""
    if capacity <= 0:
        return []
    return (np.arange(capacity) * 2 * math.pi / capacity).tolist()


def nearest_index(points: Sequence[Point], target: Point) -> Optional[int]:
    """
    Index of the point closest to ``target``

    Ties resolve to the first minimum in sequence order.

    Returns:
        Index into ``points`` or None if ``points`` is empty
    """
    if not points:
        return None
    coords = np.array([p.as_tuple() for p in points], dtype=float)
    distances = np.hypot(coords[:, 0] - target.x, coords[:, 1] - target.y)
    return int(np.argmin(distances))


def arc_points(
    origin: Point, radius: float, start_degrees: float, sweep_degrees: float, samples: int = 16
) -> List[Point]:
    """
    Sample the arc travelled when rotating a point around ``origin``

    Args:
        origin: Center of the circle
        radius: Radius of the circle
        start_degrees: Starting angular position
        sweep_degrees: Signed rotation to apply
        samples: Number of points to return, endpoints included

    Returns:
        Points from the start position to the end position
    """
    samples = max(2, samples)
    angles = np.radians(np.linspace(start_degrees, start_degrees + sweep_degrees, samples))
    xs = radius * np.cos(angles) + origin.x
    ys = radius * np.sin(angles) + origin.y
    return [Point(float(x), float(y)) for x, y in zip(xs, ys)]
