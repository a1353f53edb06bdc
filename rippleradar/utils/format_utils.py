"""
Utility functions for formatting output
"""

from typing import Any, Dict, List, Union

from rippleradar.errors import PlacementError
from rippleradar.ring import Placement


def format_placement(placement: Placement) -> str:
    """
    Format a placement for display

    Args:
        placement: Placement returned by the field

    Returns:
        Single line describing the item, ring, slot and point
    """
    return (
        f"{placement.item.key}: ring {placement.ring_name} slot {placement.slot_index} "
        f"at ({placement.point.x:.2f}, {placement.point.y:.2f})"
    )


def format_result(result: Union[Placement, PlacementError]) -> str:
    """Format either a placement or the error that prevented it"""
    if isinstance(result, Placement):
        return format_placement(result)

    key = result.item.key if result.item is not None else "?"
    return f"{key}: {type(result).__name__}: {result}"


def format_ring_stats(stats: List[Dict[str, Any]]) -> str:
    """
    Format ring statistics as a table

    Args:
        stats: Output of RadarField.get_ring_stats()

    Returns:
        Multi-line string, one ring per line
    """
    if not stats:
        return "(no rings)"

    lines = []
    for stat in stats:
        low, high = stat["distance_interval"]
        lines.append(
            f"{stat['name']:>4}  radius={stat['radius']:8.2f}  "
            f"distance=[{low:.2f}, {high:.2f})  {stat['occupancy']}/{stat['capacity']}"
        )
    return "\n".join(lines)
