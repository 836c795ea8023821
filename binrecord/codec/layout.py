"""
Binary layouts for the record format.

A layout fixes the three things the format leaves to the writer: the byte
order, the width of the id field and the width of the name length prefix.
The gpa field is always an 8-byte IEEE-754 double.

The `native` layout reproduces the host's C `int` / `size_t` widths and byte
order, which makes files unreadable on hosts that differ. The fixed presets
spell everything out and should be preferred for anything that leaves the
machine.
"""

from __future__ import annotations

import struct
import sys
from dataclasses import dataclass, field
from typing import Callable, Dict, List

from binrecord.codec.errors import UnknownLayoutError

GPA_WIDTH = 8

_BYTE_ORDER_PREFIX = {"little": "<", "big": ">"}
_SIGNED_FORMATS = {4: "i", 8: "q"}
_UNSIGNED_FORMATS = {4: "I", 8: "Q"}


@dataclass(frozen=True)
class Layout:
    """
    Field widths and byte order for one flavour of the record format.

    The fixed part of a record is `id | gpa | name length`, packed with no
    padding between fields.
    """

    name: str
    byte_order: str = "little"
    int_width: int = 4
    size_width: int = 8
    _fixed: struct.Struct = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.byte_order not in _BYTE_ORDER_PREFIX:
            raise ValueError(f"Unsupported byte order '{self.byte_order}' (use 'little' or 'big').")
        if self.int_width not in _SIGNED_FORMATS:
            raise ValueError(f"Unsupported id width {self.int_width} (use 4 or 8).")
        if self.size_width not in _UNSIGNED_FORMATS:
            raise ValueError(f"Unsupported length width {self.size_width} (use 4 or 8).")
        fmt = (
            _BYTE_ORDER_PREFIX[self.byte_order]
            + _SIGNED_FORMATS[self.int_width]
            + "d"
            + _UNSIGNED_FORMATS[self.size_width]
        )
        object.__setattr__(self, "_fixed", struct.Struct(fmt))

    @property
    def fixed(self) -> struct.Struct:
        """Struct for the fixed-width prefix (id, gpa, name length)."""
        return self._fixed

    @property
    def fixed_size(self) -> int:
        return self._fixed.size

    @property
    def id_range(self) -> range:
        bits = self.int_width * 8
        return range(-(2 ** (bits - 1)), 2 ** (bits - 1))

    @property
    def max_name_bytes(self) -> int:
        return 2 ** (self.size_width * 8) - 1

    def describe(self) -> Dict[str, object]:
        return {
            "layout": self.name,
            "byte_order": self.byte_order,
            "id_width": self.int_width,
            "gpa_width": GPA_WIDTH,
            "length_width": self.size_width,
            "fixed_size": self.fixed_size,
        }


def native_layout() -> Layout:
    """Layout matching this host's C `int`, `size_t` and byte order."""
    return Layout(
        name="native",
        byte_order=sys.byteorder,
        int_width=struct.calcsize("@i"),
        size_width=struct.calcsize("@N"),
    )


def _layout_factories() -> Dict[str, Callable[[], Layout]]:
    """Registry of layout presets."""
    return {
        "native": native_layout,
        "portable": lambda: Layout(name="portable", byte_order="little", int_width=4, size_width=8),
        "wide": lambda: Layout(name="wide", byte_order="little", int_width=8, size_width=8),
        "network": lambda: Layout(name="network", byte_order="big", int_width=4, size_width=4),
    }


def available_layouts() -> List[str]:
    """List available layout preset names."""
    return sorted(_layout_factories().keys())


def get_layout(name: str) -> Layout:
    factories = _layout_factories()
    if name not in factories:
        raise UnknownLayoutError(f"Unknown layout '{name}'. Available: {', '.join(sorted(factories))}")
    return factories[name]()


__all__ = ["GPA_WIDTH", "Layout", "available_layouts", "get_layout", "native_layout"]
