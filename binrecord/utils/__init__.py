"""
Utilities package for binrecord.

Exports shared helpers for logging and profiling.
Keep this package lightweight and free of codec-specific logic.
"""

from binrecord.utils.logging import configure_logging, get_logger
from binrecord.utils.profiler import ProfileStats, profile_block

__all__ = [
    "configure_logging",
    "get_logger",
    "ProfileStats",
    "profile_block",
]
