"""
RippleRadar: place items on the concentric rings of a radar view
"""

from rippleradar.config import Config, FieldConfig, PresentationConfig, load_config
from rippleradar.errors import (
    DuplicateKeyError,
    InvalidGeometryError,
    MissingDistanceError,
    NotFoundError,
    OutOfRangeError,
    PlacementError,
    RadarError,
    RingFullError,
)
from rippleradar.field import RadarField
from rippleradar.geometry import Point, angle_of_point, point_on_circle
from rippleradar.item import Item, ItemSnapshot
from rippleradar.presenter import DiskVisual, RadarPresenter
from rippleradar.ring import Occupant, Placement, Ring, Rotation
from rippleradar.ring_model import RingModel

__version__ = "0.1.0"

__all__ = [
    "Config",
    "FieldConfig",
    "PresentationConfig",
    "load_config",
    "RadarError",
    "InvalidGeometryError",
    "PlacementError",
    "RingFullError",
    "DuplicateKeyError",
    "OutOfRangeError",
    "MissingDistanceError",
    "NotFoundError",
    "RadarField",
    "Point",
    "point_on_circle",
    "angle_of_point",
    "Item",
    "ItemSnapshot",
    "RadarPresenter",
    "DiskVisual",
    "Ring",
    "RingModel",
    "Occupant",
    "Placement",
    "Rotation",
]
