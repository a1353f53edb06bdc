"""
Error types raised by RippleRadar
"""

from typing import Any, Optional


class RadarError(Exception):
    """Base class for all radar errors"""


class InvalidGeometryError(RadarError, ValueError):
    """Raised for a negative radius or invalid field configuration values"""


class PlacementError(RadarError):
    """
    Raised when an item cannot be placed on the field

    The item that was rejected is kept on the error so batch callers can
    report which one failed.
    """

    def __init__(self, message: str, item: Any = None):
        super().__init__(message)
        self.item = item


class RingFullError(PlacementError):
    """Raised when the target ring has no available slot"""

    def __init__(self, message: str, item: Any = None, ring_name: Optional[str] = None):
        super().__init__(message, item)
        self.ring_name = ring_name


class DuplicateKeyError(PlacementError):
    """Raised when an item with the same key is already placed"""


class OutOfRangeError(PlacementError):
    """Raised when an item's distance falls outside every configured interval"""


class MissingDistanceError(PlacementError):
    """Raised when an item has no distance and the field rejects such items"""


class NotFoundError(RadarError, KeyError):
    """Raised when removing or looking up a key that is not placed"""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"No item with key '{self.key}' is placed"
