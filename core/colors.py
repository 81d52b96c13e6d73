from __future__ import annotations

from collections import Counter
from typing import Iterable, List, Optional, Sequence

COLOR_POOL = (
    "#FF7A00", "#FF5EB3", "#6E52FF", "#9327FF", "#00BEE8",
    "#1FD7C1", "#FF745E", "#FFA35E", "#FC71FF", "#FFC701",
    "#0038FF", "#C3FF2B", "#FFE62B", "#FF4646", "#FFBB2B",
)


class ColorAssigner:
    """
    Deterministic palette assignment for contacts.

    - a color already on the contact (and in the palette) is kept
    - otherwise the first unused palette entry, in palette order
    - palette exhausted: least-used entry, ties by palette order
    """

    def __init__(self, palette: Sequence[str] = COLOR_POOL):
        if not palette:
            raise ValueError("palette must not be empty")
        self.palette = tuple(palette)

    def is_palette_color(self, color: Optional[str]) -> bool:
        return color is not None and color.upper() in (c.upper() for c in self.palette)

    def pick(self, taken: Iterable[Optional[str]]) -> str:
        usage = Counter(c.upper() for c in taken if self.is_palette_color(c))
        return min(self.palette, key=lambda c: (usage[c.upper()], self.palette.index(c)))

    def color_for(self, current: Optional[str], taken: Iterable[Optional[str]]) -> str:
        if self.is_palette_color(current):
            return current
        return self.pick(taken)

    def assign_all(self, contacts: list) -> List[str]:
        """Give every contact in `contacts` a palette color, in order. Mutates and returns the colors."""
        assigned: List[str] = []
        # los colores ya persistidos cuentan como ocupados antes de repartir
        kept = [c.color for c in contacts if self.is_palette_color(c.color)]
        pending_taken = list(kept)
        for contact in contacts:
            if self.is_palette_color(contact.color):
                assigned.append(contact.color)
                continue
            contact.color = self.pick(pending_taken)
            pending_taken.append(contact.color)
            assigned.append(contact.color)
        return assigned
