"""
Shared type definitions for the floodgrid system.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CellKind(Enum):
    """What a cell is, as far as propagation is concerned."""

    BARRIER = "barrier"  # Blocks propagation, never labeled
    INACTIVE = "inactive"  # Plain cell
    ACTIVE = "active"  # Plain cell with a display accent
    SOURCE = "source"  # Propagation origin, always distance 1


class EditAction(Enum):
    """Edit events the front end can send."""

    TOGGLE_SOURCE = "toggle_source"
    TOGGLE_BARRIER = "toggle_barrier"


# =============================================================================
# Errors
# =============================================================================


class OutOfBoundsError(IndexError):
    """A coordinate outside the grid was used."""

    def __init__(self, position: Position, rows: int, cols: int) -> None:
        super().__init__(
            f"Position out of bounds: (col={position.col}, row={position.row})\n"
            f"  Grid size: {cols} columns x {rows} rows\n"
            f"  Valid range: col in [0, {cols}), row in [0, {rows})"
        )
        self.position = position
        self.rows = rows
        self.cols = cols


class InvariantViolation(RuntimeError):
    """The source set and the cell kinds disagree."""


# =============================================================================
# Grid Definition Types
# =============================================================================


@dataclass(frozen=True)
class Position:
    """A cell coordinate, column first."""

    col: int
    row: int


def row_major(position: Position) -> tuple[int, int]:
    """Sort key: top row first, left to right."""
    return (position.row, position.col)


@dataclass
class Cell:
    """One grid cell as the engine sees it."""

    kind: CellKind = CellKind.INACTIVE
    distance: int | None = None  # None = not reached by propagation


@dataclass(frozen=True)
class CellView:
    """Read-only snapshot of a cell, handed to renderers."""

    position: Position
    kind: CellKind
    distance: int | None


@dataclass(frozen=True)
class EditEvent:
    """A single edit naming one grid coordinate."""

    action: EditAction
    position: Position


@dataclass(frozen=True)
class PropagationStats:
    """Summary of one propagation pass."""

    sources: int
    labeled: int  # Cells holding a distance after the pass, sources included
    layers: int  # Frontier layers expanded beyond the sources
    max_distance: int | None


@dataclass(frozen=True)
class FieldConfig:
    """Static settings supplied once at startup."""

    rows: int = 10
    cols: int = 10
    cell_width: int = 3  # Characters per rendered cell

    def __post_init__(self) -> None:
        for name in ("rows", "cols", "cell_width"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ValueError(f"FieldConfig.{name} must be a positive integer, got {value!r}")
