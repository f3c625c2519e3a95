"""
Fixed Minecraft block palettes.

A palette is an ordered, immutable sequence of named RGB colors. Order is part
of the contract: nearest-color ties are resolved in favour of the entry that
comes first.
"""

from typing import Dict, Iterator, NamedTuple, Tuple
import numpy as np


class PaletteError(ValueError):
    """Raised for an unusable palette definition (empty, duplicate names, bad channels)."""


class PaletteEntry(NamedTuple):
    name: str
    rgb: Tuple[int, int, int]

    @property
    def css(self) -> str:
        r, g, b = self.rgb
        return f"rgb({r},{g},{b})"


class Palette:
    def __init__(self, name: str, entries):
        entries = tuple(PaletteEntry(str(n), tuple(int(c) for c in rgb)) for n, rgb in entries)
        if not entries:
            raise PaletteError(f"Palette '{name}' has no entries.")

        by_name: Dict[str, PaletteEntry] = {}
        for entry in entries:
            if len(entry.rgb) != 3 or any(not 0 <= c <= 255 for c in entry.rgb):
                raise PaletteError(f"Palette '{name}': color for '{entry.name}' must be three 0-255 channels, got {entry.rgb}.")
            if entry.name in by_name:
                raise PaletteError(f"Palette '{name}': duplicate block name '{entry.name}'.")
            by_name[entry.name] = entry

        self.name = name
        self._entries = entries
        self._by_name = by_name
        self._array = np.array([e.rgb for e in entries], dtype=np.uint8)
        self._array.setflags(write=False)

    def entries(self) -> Tuple[PaletteEntry, ...]:
        return self._entries

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(e.name for e in self._entries)

    def lookup(self, name: str) -> PaletteEntry:
        return self._by_name[name]

    def __contains__(self, name) -> bool:
        return name in self._by_name

    def as_array(self) -> np.ndarray:
        """Return the colors as a read-only (N, 3) uint8 array in palette order."""
        return self._array

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[PaletteEntry]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"Palette({self.name!r}, {len(self)} entries)"


# Concrete colors, 0-1 floats from the first guide generator scaled by 255 and rounded half up.
_CONCRETE = [
    ("Black Concrete", (20, 20, 20)),
    ("Red Concrete", (164, 57, 57)),
    ("Green Concrete", (117, 122, 57)),
    ("Brown Concrete", (139, 69, 52)),
    ("Blue Concrete", (57, 60, 139)),
    ("Purple Concrete", (100, 57, 132)),
    ("Cyan Concrete", (57, 145, 132)),
    ("Light Gray Concrete", (132, 132, 132)),
    ("Gray Concrete", (81, 81, 81)),
    ("Pink Concrete", (237, 117, 147)),
    ("Lime Concrete", (152, 190, 55)),
    ("Yellow Concrete", (239, 190, 48)),
    ("Light Blue Concrete", (88, 111, 147)),
    ("Magenta Concrete", (158, 57, 132)),
    ("Orange Concrete", (225, 97, 44)),
    ("White Concrete", (241, 241, 241)),
]

_TERRACOTTA = [
    ("Terracotta", (152, 94, 67)),
    ("White Terracotta", (209, 178, 161)),
    ("Orange Terracotta", (161, 83, 37)),
    ("Magenta Terracotta", (149, 88, 108)),
    ("Light Blue Terracotta", (113, 108, 137)),
    ("Yellow Terracotta", (186, 133, 35)),
    ("Lime Terracotta", (103, 117, 52)),
    ("Pink Terracotta", (161, 78, 78)),
    ("Gray Terracotta", (57, 42, 35)),
    ("Light Gray Terracotta", (135, 106, 97)),
    ("Cyan Terracotta", (86, 91, 91)),
    ("Purple Terracotta", (118, 70, 86)),
    ("Blue Terracotta", (74, 59, 91)),
    ("Brown Terracotta", (77, 51, 35)),
    ("Green Terracotta", (76, 83, 42)),
    ("Red Terracotta", (143, 61, 46)),
    ("Black Terracotta", (37, 22, 16)),
]

CONCRETE_PALETTE = Palette("concrete", _CONCRETE)
TERRACOTTA_PALETTE = Palette("extended", _CONCRETE + _TERRACOTTA)

PALETTES: Dict[str, Palette] = {
    CONCRETE_PALETTE.name: CONCRETE_PALETTE,
    TERRACOTTA_PALETTE.name: TERRACOTTA_PALETTE,
}


def get_palette(name: str) -> Palette:
    try:
        return PALETTES[name.lower()]
    except KeyError:
        raise PaletteError(f"Unknown palette '{name}'. Choose from: {', '.join(PALETTES)}.") from None
