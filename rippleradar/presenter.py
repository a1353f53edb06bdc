"""
Presentation adapter binding visuals to placements on a radar field
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from rippleradar.config import PresentationConfig
from rippleradar.errors import NotFoundError, PlacementError
from rippleradar.field import RadarField
from rippleradar.geometry import Point
from rippleradar.item import Item
from rippleradar.ring import Placement, Rotation

logger = logging.getLogger(__name__)

ViewFactory = Callable[[Item, Tuple[float, float]], Any]


@dataclass
class DiskVisual:
    """Default visual: a disk centered on the item's slot"""

    key: str
    center: Point
    radius: float


class RadarPresenter:
    """
    Keeps one visual per placed item

    The field decides where items go; the presenter asks ``view_factory``
    for a visual after each successful placement and keeps visuals centered
    on their slot. Drawing, animation and hit-testing stay with the caller.
    """

    def __init__(
        self,
        field: RadarField,
        view_factory: Optional[ViewFactory] = None,
        config: Optional[PresentationConfig] = None,
    ):
        self.field = field
        self.view_factory = view_factory
        self.config = config or PresentationConfig()
        self.visuals: Dict[str, Any] = {}

    @property
    def preferred_size(self) -> Tuple[float, float]:
        diameter = self.config.item_radius * 2
        return (diameter, diameter)

    def _make_visual(self, placement: Placement) -> Any:
        if self.view_factory is None:
            return DiskVisual(placement.item.key, placement.point, self.config.item_radius)

        visual = self.view_factory(placement.item, self.preferred_size)
        if visual is None:
            return DiskVisual(placement.item.key, placement.point, self.config.item_radius)
        if hasattr(visual, "center"):
            visual.center = placement.point
        return visual

    def add(self, item: Item) -> Placement:
        """
        Place an item and build its visual

        If the view factory raises, the item is taken off the field again
        before the error propagates.
        """
        placement = self.field.add(item)
        try:
            visual = self._make_visual(placement)
        except Exception:
            self.field.remove(item.key)
            raise
        self.visuals[item.key] = visual
        return placement

    def add_items(self, items: Sequence[Item]) -> List[Union[Placement, PlacementError]]:
        """Place several items; failures are returned in place of placements"""
        results: List[Union[Placement, PlacementError]] = []
        for item in items:
            try:
                results.append(self.add(item))
            except PlacementError as e:
                results.append(e)
        return results

    def remove(self, key: str) -> Any:
        """Remove an item and return its visual so the caller can dispose of it"""
        self.field.remove(key)
        return self.visuals.pop(key, None)

    def visual_for(self, key: str) -> Any:
        if key not in self.visuals:
            raise NotFoundError(key)
        return self.visuals[key]

    def rotate(self, by_degrees: float, duration: Optional[float] = None) -> List[Rotation]:
        """
        Rotate every visual around the center

        Visuals exposing ``center`` are moved to their end point; the
        returned rotations carry the arc for callers that animate it.
        """
        if duration is None:
            duration = self.config.rotation_duration
        rotations = self.field.rotate(by_degrees, duration)
        for rotation in rotations:
            visual = self.visuals.get(rotation.key)
            if visual is not None and hasattr(visual, "center"):
                visual.center = rotation.end_point
        return rotations

    def reconfigure(self, **changes: Any) -> List[Union[Placement, PlacementError]]:
        """
        Swap in a field built with new configuration values and re-add items

        Every previously placed item is added again, in its original order,
        using its current distance and angle. Items that no longer fit are
        dropped along with their visuals.
        """
        items = self.field.items()
        self.field = self.field.reconfigure(**changes)
        self.visuals.clear()

        results = self.add_items(items)
        dropped = sum(1 for result in results if isinstance(result, PlacementError))
        if dropped:
            logger.warning(
                f"{dropped} of {len(items)} items could not be re-added after reconfiguration"
            )
        return results

    def clear(self) -> None:
        self.field.clear()
        self.visuals.clear()
