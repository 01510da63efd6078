"""
Layout parsing utilities for floodgrid.

Layouts use one character per cell:
    .  or _   inactive cell
    #         barrier
    S         source
    +         active cell
Rows are separated by | or newlines.
"""

from __future__ import annotations

from floodgrid import Field
from grid_types import CellKind, Position

__all__ = ["parse_field", "parse_kinds", "format_kinds", "KIND_CHARS"]

KIND_CHARS: dict[str, CellKind] = {
    ".": CellKind.INACTIVE,
    "_": CellKind.INACTIVE,
    "#": CellKind.BARRIER,
    "S": CellKind.SOURCE,
    "+": CellKind.ACTIVE,
}

# Preferred character when writing a layout back out
CHAR_FOR_KIND: dict[CellKind, str] = {
    CellKind.INACTIVE: ".",
    CellKind.BARRIER: "#",
    CellKind.SOURCE: "S",
    CellKind.ACTIVE: "+",
}


def parse_kinds(definition: str) -> list[list[CellKind]]:
    """
    Parse a layout string into rows of cell kinds.

    Example:
        "S..|.#.|..."
        Creates a 3x3 layout with a source at the top-left corner and a
        barrier in the middle.

    Args:
        definition: Layout string, rows separated by | or newlines

    Returns:
        List of rows, each a list of CellKind

    Raises:
        ValueError: If the layout is empty, has unknown characters, or
            rows of different lengths
    """
    row_strings = [
        line.strip()
        for chunk in definition.strip().splitlines()
        for line in chunk.split("|")
    ]
    if not any(row_strings):
        raise ValueError("Empty layout definition")

    rows: list[list[CellKind]] = []
    for row_idx, row_str in enumerate(row_strings):
        if not row_str:
            raise ValueError(
                f"Empty row in layout\n"
                f"  Row {row_idx} has no cells"
            )
        kinds: list[CellKind] = []
        for col_idx, char in enumerate(row_str):
            if char not in KIND_CHARS:
                raise ValueError(
                    f"Invalid character '{char}' in layout\n"
                    f"  Row {row_idx}: \"{row_str}\"\n"
                    f"  Position: column {col_idx}\n"
                    f"  Valid characters: '.' or '_' (inactive), '#' (barrier), "
                    f"'S' (source), '+' (active)"
                )
            kinds.append(KIND_CHARS[char])
        rows.append(kinds)

    # Validate all rows have same length
    cols = len(rows[0])
    mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != cols]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths in layout\n"
            f"  Expected: {cols} columns (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, actual_cols in mismatched:
            error_msg += f"    Row {row_idx}: {actual_cols} columns - \"{row_strings[row_idx]}\"\n"
        error_msg += "  All rows must have the same number of cells"
        raise ValueError(error_msg)

    return rows


def parse_field(definition: str) -> Field:
    """Build a Field from a layout string and run one propagation pass."""
    rows = parse_kinds(definition)
    field = Field(len(rows), len(rows[0]))
    for row_idx, kinds in enumerate(rows):
        for col_idx, kind in enumerate(kinds):
            if kind is not CellKind.INACTIVE:
                field.place(Position(col_idx, row_idx), kind)
    field.recompute()
    return field


def format_kinds(field: Field, row_separator: str = "|") -> str:
    """Write a field's cell kinds back out in layout format."""
    return row_separator.join(
        "".join(CHAR_FOR_KIND[field.kind_at(Position(col, row))] for col in range(field.cols))
        for row in range(field.rows)
    )
