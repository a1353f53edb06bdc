"""
Items placed on the radar field
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ItemSnapshot:
    """Distance and angle of an item captured at the moment it was placed"""

    key: str
    distance: Optional[float] = None
    angle: Optional[float] = None


class Item:
    """
    An entity shown on the radar

    Identity is defined by ``key`` alone: two items with the same key are the
    same item, whatever their payload. ``distance`` and ``angle`` may be
    updated by the caller (e.g. from live location updates) but the field only
    reads them when the item is added.
    """

    __slots__ = ("_key", "payload", "distance", "angle")

    def __init__(
        self,
        key: str,
        payload: Any = None,
        distance: Optional[float] = None,
        angle: Optional[float] = None,
    ):
        if not isinstance(key, str) or not key:
            raise ValueError("Item key must be a non-empty string")
        self._key = key
        self.payload = payload
        self.distance = distance
        self.angle = angle

    @property
    def key(self) -> str:
        """The unique key of the item"""
        return self._key

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "key" or (name == "_key" and hasattr(self, "_key")):
            raise AttributeError("Item key is immutable")
        object.__setattr__(self, name, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Item):
            return NotImplemented
        return self._key == other._key

    def __hash__(self) -> int:
        return hash(self._key)

    def __repr__(self) -> str:
        return f"Item(key={self._key!r}, distance={self.distance!r}, angle={self.angle!r})"

    def snapshot(self) -> ItemSnapshot:
        """Freeze the current distance and angle"""
        return ItemSnapshot(key=self._key, distance=self.distance, angle=self.angle)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation"""
        return {
            "key": self._key,
            "payload": self.payload,
            "distance": self.distance,
            "angle": self.angle,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Item":
        """
        Create from dictionary representation

        Raises:
            ValueError: distance or angle is not a number
        """
        distance = data.get("distance")
        angle = data.get("angle")
        return cls(
            key=str(data["key"]),
            payload=data.get("payload"),
            distance=None if distance is None else float(distance),
            angle=None if angle is None else float(angle),
        )
