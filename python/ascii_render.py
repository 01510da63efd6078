"""
ASCII rendering for floodgrid fields.

Draws a field as a bordered character grid, one label per cell, colored by
cell kind and distance. Hover/cursor highlighting lives in an Overlay owned by
the front end; the engine never sees it.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

import simple_chalk as chalk  # type: ignore[import-untyped]

from floodgrid import Field
from grid_types import CellKind, CellView, Position

logger = logging.getLogger(__name__)

Colorizer = Callable[[str], str]


# =============================================================================
# Display Overlay
# =============================================================================


class Overlay:
    """Display-only flags keyed by position (cursor, hover)."""

    def __init__(self, highlighted: Iterable[Position] = ()) -> None:
        self._highlighted: set[Position] = set(highlighted)

    def __contains__(self, position: object) -> bool:
        return position in self._highlighted

    def __len__(self) -> int:
        return len(self._highlighted)

    def highlight(self, position: Position) -> None:
        self._highlighted.add(position)

    def unhighlight(self, position: Position) -> None:
        self._highlighted.discard(position)

    def move(self, position: Position) -> None:
        """Highlight only this position (single cursor)."""
        self._highlighted = {position}

    def clear(self) -> None:
        self._highlighted.clear()


# =============================================================================
# Cell Appearance
# =============================================================================


# Labeled cells fade from bright to plain as distance grows
INACTIVE_SHADES: list[Colorizer] = [chalk.blueBright, chalk.cyan, chalk.blue]
ACTIVE_SHADES: list[Colorizer] = [chalk.greenBright, chalk.green]


def _shade(shades: list[Colorizer], distance: int) -> Colorizer:
    # Distance 2 is the first labeled layer
    return shades[min(max(distance - 2, 0), len(shades) - 1)]


def cell_text(view: CellView, cell_width: int = 3) -> str:
    """Label shown for a cell, centered in cell_width characters."""
    if view.kind is CellKind.BARRIER:
        label = "#"
    elif view.distance is None:
        label = "."
    else:
        label = str(view.distance)

    if len(label) > cell_width:
        label = "+" * cell_width  # Too wide to show
    return label if cell_width == 1 else label.center(cell_width)


def cell_colorizer(view: CellView) -> Colorizer:
    """
    Pick the color for a cell.

    Barrier: black block. Source: red. Unlabeled: white. Labeled cells are
    blue (inactive) or green (active), fading with distance.
    """
    match view.kind:
        case CellKind.BARRIER:
            return chalk.bgBlack.white
        case CellKind.SOURCE:
            return chalk.bgRed.white
    if view.distance is None:
        return chalk.white
    if view.kind is CellKind.ACTIVE:
        return _shade(ACTIVE_SHADES, view.distance)
    return _shade(INACTIVE_SHADES, view.distance)


# =============================================================================
# Field Rendering
# =============================================================================


def render_field(
    field: Field,
    cell_width: int = 3,
    overlay: Overlay | None = None,
    title: str = "floodgrid",
    color: bool = True,
) -> str:
    """
    Render a field as a bordered box of cell labels.

    Args:
        field: The field to draw
        cell_width: Characters per cell (default 3)
        overlay: Optional highlighted positions (shown with a white background)
        title: Text centered in the top border
        color: If False, emit plain text with no ANSI codes

    Returns:
        Rendered string, one line per grid row plus borders
    """
    border = (lambda s: s) if not color else chalk.white
    grid_width = field.cols * cell_width + 2  # +2 for borders
    title = f" {title} " if title else ""

    lines: list[str] = []

    # Top border with title
    title_line = "┌" + "─" * (grid_width - 2) + "┐"
    if title and len(title) <= grid_width - 2:
        title_start = (grid_width - len(title)) // 2
        title_line = (
            "┌" +
            "─" * (title_start - 1) +
            title +
            "─" * (grid_width - title_start - len(title) - 1) +
            "┐"
        )
    lines.append(border(title_line))

    views = field.cells()
    for row in range(field.rows):
        line_parts = [border("│")]
        for view in views[row * field.cols:(row + 1) * field.cols]:
            content = cell_text(view, cell_width)
            is_highlighted = overlay is not None and view.position in overlay

            if is_highlighted:
                content = chalk.bgWhite.black(content) if color else _mark_plain(content)
            elif color:
                content = cell_colorizer(view)(content)

            line_parts.append(content)
        line_parts.append(border("│"))
        lines.append("".join(line_parts))

    # Bottom border
    lines.append(border("└" + "─" * (grid_width - 2) + "┘"))

    logger.debug("render_field: %dx%d, highlighted=%d", field.cols, field.rows, len(overlay or ()))
    return "\n".join(lines)


def _mark_plain(content: str) -> str:
    """Bracket a cell's label for uncolored output."""
    if len(content) < 3:
        return content
    return "[" + content[1:-1] + "]"


def render_distances(field: Field, width: int | None = None) -> str:
    """
    Plain distance table: one row per line, '#' for barriers, '.' for
    unreachable cells. Columns are right-aligned to the widest label.
    """
    views = field.cells()
    labels = [
        ["#" if v.kind is CellKind.BARRIER else "." if v.distance is None else str(v.distance)
         for v in views[row * field.cols:(row + 1) * field.cols]]
        for row in range(field.rows)
    ]
    if width is None:
        width = max(len(label) for row in labels for label in row)
    return "\n".join(" ".join(label.rjust(width) for label in row) for row in labels)
