"""
Coloring Assigner
=================

Bounded Context: Deterministic piece colors.

Pieces are grouped by shape id (first-seen order), the groups concatenated,
and each piece takes palette[global_index % 8]. Identical shapes therefore
get different colors, and the result only depends on load order.

Colors are assigned once at load and never change afterwards (z-order
changes included).
"""

from dataclasses import dataclass
from typing import Dict, Hashable, List, Sequence, Tuple

import supervision as sv


@dataclass(frozen=True)
class PaletteColor:
    name: str
    hex: str

    def as_sv_color(self) -> sv.Color:
        return sv.Color.from_hex(self.hex)


PALETTE: Tuple[PaletteColor, ...] = (
    PaletteColor("red", "#e53935"),
    PaletteColor("orange", "#fb8c00"),
    PaletteColor("yellow", "#fdd835"),
    PaletteColor("green", "#43a047"),
    PaletteColor("cyan", "#00acc1"),
    PaletteColor("blue", "#1e88e5"),
    PaletteColor("purple", "#8e24aa"),
    PaletteColor("pink", "#d81b60"),
)


def group_in_first_seen_order(keys: Sequence[Hashable]) -> Dict[Hashable, List[int]]:
    """Positions of each key, keys ordered by first appearance."""
    groups: Dict[Hashable, List[int]] = {}
    for position, key in enumerate(keys):
        groups.setdefault(key, []).append(position)
    return groups


def assign_colors(group_keys: Sequence[Hashable]) -> List[int]:
    """
    Color index for each piece.

    Args:
        group_keys: Shape group key of each piece, in load order

    Returns:
        Palette index per piece, aligned with group_keys

    Example:
        >>> assign_colors(["circle_d30", "circle_d30", "square_30"])
        [0, 1, 2]
    """
    colors = [0] * len(group_keys)
    global_index = 0
    for positions in group_in_first_seen_order(group_keys).values():
        for position in positions:
            colors[position] = global_index % len(PALETTE)
            global_index += 1
    return colors


def palette_color(color_index: int) -> PaletteColor:
    return PALETTE[color_index % len(PALETTE)]
