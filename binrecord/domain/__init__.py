"""
Domain package for binrecord.

Exports the record model shared by the codec, storage helpers and CLI.
Keep this package focused on data definitions.
"""

from binrecord.domain.models import Record

__all__ = [
    "Record",
]
