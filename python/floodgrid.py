"""
Distance propagation over a 2D grid with barriers.
Sources flood outward in layers; every reachable cell is labeled with
1 + its step count from the nearest source.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from grid_types import (
    Cell,
    CellKind,
    CellView,
    EditAction,
    EditEvent,
    FieldConfig,
    InvariantViolation,
    OutOfBoundsError,
    Position,
    PropagationStats,
    row_major,
)

logger = logging.getLogger(__name__)

# Neighbor order: left, up, right, down
NEIGHBOR_OFFSETS: tuple[tuple[int, int], ...] = ((-1, 0), (0, -1), (1, 0), (0, 1))

SOURCE_DISTANCE = 1


# =============================================================================
# Grid
# =============================================================================


class Grid:
    """
    Fixed-size grid of cells stored as a flat, row-major array.

    Cells hold no coordinates or links to each other; neighbors are computed
    from positions on demand.
    """

    def __init__(self, rows: int, cols: int) -> None:
        for name, value in (("rows", rows), ("cols", cols)):
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ValueError(f"Grid {name} must be a positive integer, got {value!r}")
        self._rows = rows
        self._cols = cols
        self._cells: list[Cell] = [Cell() for _ in range(rows * cols)]

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    def __len__(self) -> int:
        return len(self._cells)

    def __repr__(self) -> str:
        return f"Grid(rows={self._rows}, cols={self._cols})"

    def contains(self, position: Position) -> bool:
        return 0 <= position.col < self._cols and 0 <= position.row < self._rows

    def check(self, position: Position) -> None:
        """Raise OutOfBoundsError unless position lies inside the grid."""
        if not self.contains(position):
            raise OutOfBoundsError(position, self._rows, self._cols)

    def index_of(self, position: Position) -> int:
        self.check(position)
        return position.row * self._cols + position.col

    def position_of(self, index: int) -> Position:
        if not 0 <= index < len(self._cells):
            raise IndexError(f"Cell index {index} out of range for {self!r}")
        row, col = divmod(index, self._cols)
        return Position(col, row)

    def cell_at(self, position: Position) -> Cell:
        return self._cells[self.index_of(position)]

    def neighbors(self, position: Position) -> list[Position]:
        """
        Get the in-bounds orthogonal neighbors of a position.

        Always returned in the order left, up, right, down (missing entries
        skipped), so propagation breaks ties the same way on every call.

        Raises:
            OutOfBoundsError: If position itself is outside the grid
        """
        self.check(position)
        adjacent: list[Position] = []
        for dc, dr in NEIGHBOR_OFFSETS:
            col, row = position.col + dc, position.row + dr
            if 0 <= col < self._cols and 0 <= row < self._rows:
                adjacent.append(Position(col, row))
        return adjacent

    def set_kind(self, position: Position, kind: CellKind) -> None:
        """Change a cell's kind. Barriers lose their distance immediately."""
        cell = self.cell_at(position)
        cell.kind = kind
        if kind is CellKind.BARRIER:
            cell.distance = None

    def positions(self) -> Iterator[Position]:
        """All positions, row-major."""
        for index in range(len(self._cells)):
            yield self.position_of(index)

    def __iter__(self) -> Iterator[tuple[Position, Cell]]:
        for index, cell in enumerate(self._cells):
            yield self.position_of(index), cell

    def positions_of_kind(self, kind: CellKind) -> list[Position]:
        return [pos for pos, cell in self if cell.kind is kind]

    def clear_distances(self) -> None:
        for cell in self._cells:
            cell.distance = None


# =============================================================================
# Propagation
# =============================================================================


def check_sources(grid: Grid, sources: Iterable[Position]) -> list[Position]:
    """
    Validate a source set against the grid and return it sorted row-major.

    Raises:
        OutOfBoundsError: If a source lies outside the grid
        InvariantViolation: If a listed source is not a SOURCE cell, or a
            SOURCE cell is missing from the set
    """
    ordered = sorted(set(sources), key=row_major)
    for pos in ordered:
        kind = grid.cell_at(pos).kind
        if kind is not CellKind.SOURCE:
            raise InvariantViolation(
                f"Source set lists (col={pos.col}, row={pos.row}) but that cell is {kind.value}"
            )

    listed_sources = set(ordered)
    missing = [pos for pos in grid.positions_of_kind(CellKind.SOURCE) if pos not in listed_sources]
    if missing:
        listed = ", ".join(f"(col={p.col}, row={p.row})" for p in missing)
        raise InvariantViolation(f"Source cells missing from the source set: {listed}")
    return ordered


def propagate(grid: Grid, sources: Iterable[Position]) -> PropagationStats:
    """
    Relabel every cell with its distance from the nearest source.

    Multi-source layered BFS:
    - All distances are cleared; sources are set to 1
    - The first frontier is the sources' neighbors, labeled 2
    - Each following frontier is the unseen neighbors of the cells just
      labeled, one higher than the last
    - Barriers in a frontier are skipped: never labeled, never expanded

    A coordinate is enqueued at most once, so the label a cell gets is the
    first layer that reaches it. Unreachable cells keep None.

    Args:
        grid: The grid to relabel in place
        sources: Coordinates of every SOURCE cell

    Returns:
        PropagationStats describing the pass

    Raises:
        OutOfBoundsError: If a source lies outside the grid
        InvariantViolation: If sources and cell kinds disagree
    """
    ordered = check_sources(grid, sources)

    grid.clear_distances()
    for pos in ordered:
        grid.cell_at(pos).distance = SOURCE_DISTANCE

    seen: set[Position] = set(ordered)
    frontier: list[Position] = []
    for pos in ordered:
        for neighbor in grid.neighbors(pos):
            if neighbor not in seen:
                seen.add(neighbor)
                frontier.append(neighbor)

    layer = SOURCE_DISTANCE + 1
    layers = 0
    labeled = len(ordered)
    max_distance: int | None = SOURCE_DISTANCE if ordered else None

    while frontier:
        next_frontier: list[Position] = []
        reached = 0

        for pos in frontier:
            cell = grid.cell_at(pos)
            if cell.kind is CellKind.BARRIER:
                continue
            cell.distance = layer
            reached += 1

            for neighbor in grid.neighbors(pos):
                if neighbor not in seen:
                    seen.add(neighbor)
                    next_frontier.append(neighbor)

        if reached:
            layers += 1
            labeled += reached
            max_distance = layer
        logger.debug("propagate: layer %d frontier=%d labeled=%d", layer, len(frontier), reached)

        frontier = next_frontier
        layer += 1

    logger.info(
        "propagate: sources=%d labeled=%d layers=%d max_distance=%s",
        len(ordered),
        labeled,
        layers,
        max_distance,
    )
    return PropagationStats(
        sources=len(ordered), labeled=labeled, layers=layers, max_distance=max_distance
    )


# =============================================================================
# Edit Events
# =============================================================================


def toggle_source(grid: Grid, sources: set[Position], position: Position) -> bool:
    """
    Flip a cell between SOURCE and INACTIVE, keeping `sources` in step.

    A new source is labeled 1 straight away, before any propagation pass.

    Returns:
        True if the cell is now a source
    """
    cell = grid.cell_at(position)
    if cell.kind is CellKind.SOURCE:
        sources.discard(position)
        grid.set_kind(position, CellKind.INACTIVE)
        logger.debug("toggle_source: removed (col=%d, row=%d)", position.col, position.row)
        return False

    sources.add(position)
    grid.set_kind(position, CellKind.SOURCE)
    cell.distance = SOURCE_DISTANCE
    logger.debug("toggle_source: added (col=%d, row=%d)", position.col, position.row)
    return True


def toggle_barrier(grid: Grid, sources: set[Position], position: Position) -> bool:
    """
    Flip a cell between BARRIER and INACTIVE.

    Any non-barrier cell becomes a barrier, sources included; a source that
    becomes a barrier is dropped from `sources`.

    Returns:
        True if the cell is now a barrier
    """
    cell = grid.cell_at(position)
    if cell.kind is CellKind.BARRIER:
        grid.set_kind(position, CellKind.INACTIVE)
        logger.debug("toggle_barrier: removed (col=%d, row=%d)", position.col, position.row)
        return False

    if cell.kind is CellKind.SOURCE:
        sources.discard(position)
    grid.set_kind(position, CellKind.BARRIER)
    logger.debug("toggle_barrier: added (col=%d, row=%d)", position.col, position.row)
    return True


# =============================================================================
# Field: grid + source set + recompute-after-edit
# =============================================================================


class Field:
    """
    A grid together with its source set.

    Every edit made through a Field is followed by a full propagation pass,
    so labels read from it are always current.
    """

    def __init__(self, rows: int, cols: int) -> None:
        self.grid = Grid(rows, cols)
        self._sources: set[Position] = set()
        self.last_stats: PropagationStats | None = None

    @classmethod
    def from_config(cls, config: FieldConfig) -> Field:
        return cls(config.rows, config.cols)

    @property
    def rows(self) -> int:
        return self.grid.rows

    @property
    def cols(self) -> int:
        return self.grid.cols

    @property
    def sources(self) -> tuple[Position, ...]:
        return tuple(sorted(self._sources, key=row_major))

    # -- queries --------------------------------------------------------------

    def cells(self) -> tuple[CellView, ...]:
        """Position, kind and distance of every cell, row-major."""
        return tuple(CellView(pos, cell.kind, cell.distance) for pos, cell in self.grid)

    def view(self, position: Position) -> CellView:
        cell = self.grid.cell_at(position)
        return CellView(position, cell.kind, cell.distance)

    def kind_at(self, position: Position) -> CellKind:
        return self.grid.cell_at(position).kind

    def distance_at(self, position: Position) -> int | None:
        return self.grid.cell_at(position).distance

    def distances(self) -> list[list[int | None]]:
        """Distance labels as a list of rows."""
        return [
            [self.grid.cell_at(Position(col, row)).distance for col in range(self.cols)]
            for row in range(self.rows)
        ]

    # -- edits ----------------------------------------------------------------

    def toggle_source(self, position: Position) -> bool:
        is_source = toggle_source(self.grid, self._sources, position)
        self.recompute()
        return is_source

    def toggle_barrier(self, position: Position) -> bool:
        is_barrier = toggle_barrier(self.grid, self._sources, position)
        self.recompute()
        return is_barrier

    def place(self, position: Position, kind: CellKind) -> None:
        """
        Set a cell's kind directly, keeping the source set in step.

        Does not recompute; used to load a whole layout before one pass.
        """
        self.grid.set_kind(position, kind)
        if kind is CellKind.SOURCE:
            self._sources.add(position)
            self.grid.cell_at(position).distance = SOURCE_DISTANCE
        else:
            self._sources.discard(position)

    def set_active(self, position: Position, active: bool) -> None:
        """
        Switch a plain cell between ACTIVE and INACTIVE.

        Raises:
            ValueError: If the cell is a barrier or a source
        """
        kind = self.kind_at(position)
        if kind not in (CellKind.ACTIVE, CellKind.INACTIVE):
            raise ValueError(
                f"Only plain cells can be (de)activated; (col={position.col}, "
                f"row={position.row}) is {kind.value}"
            )
        self.grid.set_kind(position, CellKind.ACTIVE if active else CellKind.INACTIVE)

    def apply(self, event: EditEvent) -> bool:
        """Apply one edit event and recompute."""
        match event.action:
            case EditAction.TOGGLE_SOURCE:
                return self.toggle_source(event.position)
            case EditAction.TOGGLE_BARRIER:
                return self.toggle_barrier(event.position)
        raise ValueError(f"Unknown edit action: {event.action!r}")

    def apply_all(self, events: Iterable[EditEvent]) -> PropagationStats | None:
        for event in events:
            self.apply(event)
        return self.last_stats

    def clear(self) -> None:
        """Back to a blank grid: every cell INACTIVE, no sources, no labels."""
        for pos in self.grid.positions():
            self.grid.set_kind(pos, CellKind.INACTIVE)
        self._sources.clear()
        self.recompute()

    def recompute(self) -> PropagationStats:
        self.last_stats = propagate(self.grid, self._sources)
        return self.last_stats

    def check_invariants(self) -> None:
        """
        Raise InvariantViolation if the field is inconsistent.

        Checks the source set against cell kinds, that barriers are unlabeled,
        and that sources are labeled 1.
        """
        check_sources(self.grid, self._sources)
        for pos, cell in self.grid:
            if cell.kind is CellKind.BARRIER and cell.distance is not None:
                raise InvariantViolation(
                    f"Barrier at (col={pos.col}, row={pos.row}) has distance {cell.distance}"
                )
            if cell.kind is CellKind.SOURCE and cell.distance != SOURCE_DISTANCE:
                raise InvariantViolation(
                    f"Source at (col={pos.col}, row={pos.row}) has distance {cell.distance}"
                )
