"""
Blueprint Layout
================

Bounded Context: Printable summary of a puzzle (what to cut, how many).

Page structure (three columns, one row per band):

    +-----------------+-------+------------------------------+
    | Board 113×123 mm|       |        [board outline]       |
    +-----------------+-------+------------------------------+
    | Circle (d 30 mm)|   2   | ( ) ( )                      |
    +-----------------+-------+------------------------------+
    | Square (30 mm)  |   1   | [ ]                          |
    +-----------------+-------+------------------------------+

Design:
- Layout computed in millimeters, emitted in pixels (px_per_mm)
- Board row first, then one row per shape group in coloring order
- Copies drawn in their canonical orientation (rotation 0, unflipped)
- Shape y axis points up, page y axis points down: rows flip vertically
"""

import math
from typing import List, Sequence, Tuple

from tessera_board.catalog import shape_label_lines
from tessera_board.errors import EmptyPuzzle
from tessera_board.geometry import Polygon
from tessera_board.puzzle import Puzzle

from .description import (
    BlueprintRow,
    DrawCommand,
    LineCommand,
    PathCommand,
    RasterDescription,
    RectCommand,
    TextAnchor,
    TextCommand,
)

# Page geometry (mm)
PAD_MM = 5.0
ROW_GAP_MM = 8.0
COL_GAP_MM = 2.0
MIN_CONTENT_WIDTH_MM = 160.0

# Column widths (px), derived from the longest text they hold
LABEL_CHAR_PX = 26.0
LABEL_MIN_PX = 220.0
LABEL_EXTRA_PX = 44.0
COUNT_DIGIT_PX = 20.0
COUNT_MIN_PX = 40.0
COUNT_EXTRA_PX = 24.0

# Text
BOARD_FONT_PX = 30.0
ROW_FONT_PX = 26.0
BOARD_LINE_GAP_PX = 34.0
ROW_LINE_GAP_PX = 30.0
TEXT_INSET_PX = 22.0

# Colors
BACKGROUND = "#ffffff"
STROKE = "#333333"
SEPARATOR = "#dddddd"
TEXT = "#333333"
OUTLINE_WIDTH_PX = 1.8
SEPARATOR_WIDTH_PX = 1.0


def _outline_path(polygon: Polygon, left_mm: float, top_mm: float, k: float) -> PathCommand:
    """Place a polygon's bounding box at (left, top) on the page, flipping y."""
    min_x, _, _, max_y = polygon.bounds
    points = tuple(
        ((left_mm + (x - min_x)) * k, (top_mm + (max_y - y)) * k)
        for x, y in polygon.vertices
    )
    return PathCommand(points=points, stroke=STROKE, stroke_width=OUTLINE_WIDTH_PX)


def _text_lines(
    lines: Sequence[str], x_px: float, center_px: float, font_px: float, gap_px: float,
    anchor: TextAnchor = TextAnchor.START,
) -> List[TextCommand]:
    first = center_px - gap_px * (len(lines) - 1) / 2.0
    return [
        TextCommand(x=x_px, y=first + i * gap_px, text=line, font_size=font_px, fill=TEXT, anchor=anchor)
        for i, line in enumerate(lines)
    ]


def layout_blueprint(puzzle: Puzzle, px_per_mm: float, language: str = "en") -> RasterDescription:
    """
    Lay out the blueprint of a puzzle.

    Args:
        puzzle: Loaded puzzle (piece transforms are ignored)
        px_per_mm: Output scale, > 0
        language: "en" or "zh" (selects catalog/board labels)

    Returns:
        RasterDescription with pixel coordinates

    Raises:
        ValueError: px_per_mm not a positive finite number
        EmptyPuzzle: Puzzle has no pieces
    """
    if isinstance(px_per_mm, bool) or not isinstance(px_per_mm, (int, float)) \
            or not math.isfinite(px_per_mm) or px_per_mm <= 0:
        raise ValueError(f"px_per_mm must be a positive number, got {px_per_mm!r}")
    if not puzzle.pieces:
        raise EmptyPuzzle("Cannot lay out a blueprint for a puzzle with no pieces")

    k = float(px_per_mm)
    board = puzzle.board

    # ---- Rows (model) ----
    board_lines = board.display_lines(language)
    shape_rows: List[Tuple[str, List[str], int, Polygon]] = []
    for key, pieces in puzzle.groups().items():
        first = pieces[0]
        shape_rows.append((key, shape_label_lines(first.shape, language), len(pieces), first.outline))

    # ---- Columns ----
    all_lines = board_lines + [line for _, lines, _, _ in shape_rows for line in lines]
    longest = max(len(line) for line in all_lines)
    digits = max(len(str(count)) for _, _, count, _ in shape_rows)
    label_w = (max(longest * LABEL_CHAR_PX, LABEL_MIN_PX) + LABEL_EXTRA_PX) / k
    count_w = (max(digits * COUNT_DIGIT_PX, COUNT_MIN_PX) + COUNT_EXTRA_PX) / k

    x_sep1 = PAD_MM + label_w
    x_sep2 = x_sep1 + count_w
    graphics_x = x_sep2 + COL_GAP_MM

    def copies_width(outline: Polygon, count: int) -> float:
        return outline.size[0] * count + ROW_GAP_MM * (count - 1)

    graphics_w = max(
        [board.width] + [copies_width(outline, count) for _, _, count, outline in shape_rows]
    ) + 2 * COL_GAP_MM
    content_w = max(label_w + count_w + graphics_w, MIN_CONTENT_WIDTH_MM)
    total_w = content_w + 2 * PAD_MM
    right_edge = total_w - PAD_MM

    board_band = board.height + ROW_GAP_MM
    bands = [board_band] + [outline.size[1] + ROW_GAP_MM for _, _, _, outline in shape_rows]
    total_h = 2 * PAD_MM + sum(bands)

    width_px = int(math.ceil(total_w * k - 1e-9))
    height_px = int(math.ceil(total_h * k - 1e-9))

    commands: List[DrawCommand] = [RectCommand(0.0, 0.0, float(width_px), float(height_px), BACKGROUND)]
    rows: List[BlueprintRow] = []

    # ---- Separators ----
    for x in (x_sep1, x_sep2):
        commands.append(LineCommand(x * k, PAD_MM * k, x * k, (total_h - PAD_MM) * k,
                                    SEPARATOR, SEPARATOR_WIDTH_PX))
    y = PAD_MM
    commands.append(LineCommand(PAD_MM * k, y * k, right_edge * k, y * k, SEPARATOR, SEPARATOR_WIDTH_PX))
    for band in bands:
        y += band
        commands.append(LineCommand(PAD_MM * k, y * k, right_edge * k, y * k, SEPARATOR, SEPARATOR_WIDTH_PX))

    text_x = PAD_MM * k + TEXT_INSET_PX
    count_x = (x_sep1 + x_sep2) / 2.0 * k

    # ---- Board row ----
    top = PAD_MM
    center = top + board_band / 2.0
    board_left = x_sep2 + (right_edge - x_sep2 - board.width) / 2.0
    board_min_x, _, _, board_max_y = board.bounds
    board_top = top + ROW_GAP_MM / 2.0
    for ring in board.rings:
        # Rings keep their offsets relative to the board's bounding box
        ring_min_x, _, _, ring_max_y = ring.bounds
        commands.append(_outline_path(
            ring,
            board_left + (ring_min_x - board_min_x),
            board_top + (board_max_y - ring_max_y),
            k,
        ))
    commands.extend(_text_lines(board_lines, text_x, center * k, BOARD_FONT_PX, BOARD_LINE_GAP_PX))
    rows.append(BlueprintRow("board", "board", tuple(board_lines), 0, top * k, board_band * k))
    top += board_band

    # ---- Shape rows ----
    for (key, lines, count, outline), band in zip(shape_rows, bands[1:]):
        center = top + band / 2.0
        width, height = outline.size
        copy_top = center - height / 2.0
        x = graphics_x
        for _ in range(count):
            commands.append(_outline_path(outline, x, copy_top, k))
            x += width + ROW_GAP_MM

        commands.extend(_text_lines(lines, text_x, center * k, ROW_FONT_PX, ROW_LINE_GAP_PX))
        commands.append(TextCommand(count_x, center * k, str(count), ROW_FONT_PX, TEXT, TextAnchor.MIDDLE))
        rows.append(BlueprintRow("shape", key, tuple(lines), count, top * k, band * k))
        top += band

    return RasterDescription(
        width_px=width_px,
        height_px=height_px,
        px_per_mm=k,
        commands=tuple(commands),
        rows=tuple(rows),
    )
