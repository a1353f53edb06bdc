"""
Utilities module initialization
"""

from rippleradar.utils.format_utils import (
    format_placement,
    format_result,
    format_ring_stats,
)
from rippleradar.utils.logging_utils import setup_logging

__all__ = [
    "format_placement",
    "format_result",
    "format_ring_stats",
    "setup_logging",
]
