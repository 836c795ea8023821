"""
Infrastructure package for binrecord.

Centralizes file I/O concerns: record storage on disk and the thin local
filesystem wrapper. Keep this layer focused on I/O and resource management,
decoupled from the codec itself.
"""

from binrecord.infrastructure.filesystem import DirEntry, LocalFileSystem
from binrecord.infrastructure.storage import default_codec, load_record, save_record

__all__ = [
    "DirEntry",
    "LocalFileSystem",
    "default_codec",
    "load_record",
    "save_record",
]
