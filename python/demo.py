"""
Demonstration scripts for the floodgrid distance labeling.
"""

import logging
import sys

from ascii_render import render_distances, render_field
from floodgrid import Field
from grid_parser import parse_field
from grid_types import EditAction, EditEvent, Position


def corner_demo() -> None:
    """The 3x3 walk-through: one source, then a barrier beside it."""
    field = Field(3, 3)

    print("=" * 40)
    print("3x3 grid, source at top-left:")
    print("=" * 40)
    field.toggle_source(Position(0, 0))
    print(render_distances(field))
    print()

    print("=" * 40)
    print("Barrier placed at (1, 0):")
    print("=" * 40)
    field.toggle_barrier(Position(1, 0))
    print(render_distances(field))
    print()


def event_stream_demo() -> None:
    """Feed a stream of edit events through a field, as a front end would."""
    field = Field(5, 7)
    events = [
        EditEvent(EditAction.TOGGLE_SOURCE, Position(0, 2)),
        EditEvent(EditAction.TOGGLE_SOURCE, Position(6, 2)),
        *(EditEvent(EditAction.TOGGLE_BARRIER, Position(3, row)) for row in range(4)),
    ]
    stats = field.apply_all(events)

    print("=" * 40)
    print("Two sources split by a wall with a gap at the bottom:")
    print("=" * 40)
    print(render_field(field, title="two sources"))
    print(stats)
    print()

    print("=" * 40)
    print("Gap closed; right-hand source removed:")
    print("=" * 40)
    field.toggle_barrier(Position(3, 4))
    field.toggle_source(Position(6, 2))
    print(render_field(field, title="cut off"))
    print(field.last_stats)
    print()


def maze_demo() -> None:
    """Label a small maze."""
    field = parse_field(
        """
        S.#.....
        .##.###.
        ....#...
        .####.#.
        ......#S
        """
    )
    print("=" * 40)
    print("Maze with two sources:")
    print("=" * 40)
    print(render_field(field, title="maze"))
    print()


if __name__ == "__main__":
    level = logging.DEBUG if "-v" in sys.argv else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    corner_demo()
    event_stream_demo()
    maze_demo()
