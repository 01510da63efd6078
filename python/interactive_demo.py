"""
Interactive demo for floodgrid.
Move a cursor over the grid, place sources and barriers, and watch the
distance labels update after every edit.
"""

import logging
import sys

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import Overlay, render_field
from grid_parser import format_kinds, parse_field
from grid_types import CellKind, FieldConfig, OutOfBoundsError, Position


class InteractiveDemo:
    """Keyboard-driven editor for a field."""

    def __init__(self, layout: str, config: FieldConfig | None = None) -> None:
        self.layout = layout  # Starting layout, used by reset
        self.field = parse_field(layout)
        self.config = config or FieldConfig(rows=self.field.rows, cols=self.field.cols)
        self.cursor = Position(0, 0)
        self.overlay = Overlay([self.cursor])
        self.console = Console()
        self.status_message = "Ready"

    def generate_display(self) -> Panel:
        """Generate the current display with grid and status."""
        view = self.field.view(self.cursor)

        status = Text()
        status.append("Cursor: ", style="bold")
        status.append(f"(col={self.cursor.col}, row={self.cursor.row})  ")
        status.append("Cell: ", style="bold")
        distance = "-" if view.distance is None else str(view.distance)
        status.append(f"{view.kind.value}, distance {distance}\n")

        stats = self.field.last_stats
        if stats is not None:
            status.append("Sources: ", style="bold")
            status.append(f"{stats.sources}  ")
            status.append("Labeled: ", style="bold")
            status.append(f"{stats.labeled}/{len(self.field.grid)}  ")
            status.append("Farthest: ", style="bold")
            status.append(f"{stats.max_distance if stats.max_distance is not None else '-'}\n\n")

        # Convert ANSI-colored grid text to Rich Text
        grid_text = render_field(self.field, self.config.cell_width, self.overlay)
        status.append(Text.from_ansi(grid_text))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  W/A/S/D - Move cursor\n")
        status.append("  E - Toggle source\n")
        status.append("  X - Toggle barrier\n")
        status.append("  F - Toggle active highlight\n")
        status.append("  C - Clear grid\n")
        status.append("  R - Reset to starting layout\n")
        status.append("  Q - Quit\n\n")

        # Status line at the bottom
        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="floodgrid Interactive Demo", border_style="green", width=80)

    def move_cursor(self, dc: int, dr: int) -> None:
        target = Position(self.cursor.col + dc, self.cursor.row + dr)
        if not self.field.grid.contains(target):
            self.status_message = "Edge of grid"
            return
        self.cursor = target
        self.overlay.move(target)
        self.status_message = f"Moved to (col={target.col}, row={target.row})"

    def toggle_source(self) -> None:
        try:
            now_source = self.field.toggle_source(self.cursor)
        except OutOfBoundsError as exc:
            self.status_message = f"✗ {exc}"
            return
        self.status_message = "✓ Source placed" if now_source else "✓ Source removed"

    def toggle_barrier(self) -> None:
        try:
            now_barrier = self.field.toggle_barrier(self.cursor)
        except OutOfBoundsError as exc:
            self.status_message = f"✗ {exc}"
            return
        self.status_message = "✓ Barrier placed" if now_barrier else "✓ Barrier removed"

    def toggle_active(self) -> None:
        kind = self.field.kind_at(self.cursor)
        try:
            self.field.set_active(self.cursor, kind is not CellKind.ACTIVE)
        except ValueError:
            self.status_message = f"✗ Cannot highlight a {kind.value} cell"
            return
        self.status_message = "✓ Highlight toggled"

    def clear(self) -> None:
        self.field.clear()
        self.status_message = "Grid cleared"

    def reset_grid(self) -> None:
        """Reset the grid to its starting layout."""
        self.field = parse_field(self.layout)
        self.status_message = "Grid reset to starting layout"

    def handle_key(self, key: str) -> bool:
        """
        Apply one key press.

        Returns:
            False when the demo should stop
        """
        match key.lower():
            case "q":
                self.status_message = "Quitting..."
                return False
            case "w":
                self.move_cursor(0, -1)
            case "s":
                self.move_cursor(0, 1)
            case "a":
                self.move_cursor(-1, 0)
            case "d":
                self.move_cursor(1, 0)
            case "e":
                self.toggle_source()
            case "x":
                self.toggle_barrier()
            case "f":
                self.toggle_active()
            case "c":
                self.clear()
            case "r":
                self.reset_grid()
            case _:
                self.status_message = f"Unknown key: {repr(key)}"
        return True

    def run(self) -> None:
        """Run the interactive demo."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())
                    if not self.handle_key(readchar.readkey()):
                        live.update(self.generate_display())
                        break
            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())

        logging.getLogger(__name__).info("final layout: %s", format_kinds(self.field))


def blank_layout(config: FieldConfig) -> str:
    """All-inactive layout of the configured size."""
    return "|".join("." * config.cols for _ in range(config.rows))


def default_layout(config: FieldConfig) -> str:
    """Blank grid with a barrier in the top-left corner."""
    return "#" + blank_layout(config)[1:]


LAYOUTS = dict(
    default=default_layout(FieldConfig()),
    blank=blank_layout(FieldConfig()),
    maze=(
        "S...#.....|"
        ".##.#.###.|"
        ".#..#...#.|"
        ".#.####.#.|"
        ".#......#.|"
        ".######.#.|"
        "......#.#.|"
        ".####.#.##|"
        ".#....#...|"
        ".#.####.#S"
    ),
    pocket="S.......|.######.|.#....#.|.#....#.|.######.|........",
)


def main(argv: list[str] | None = None) -> int:
    """Run the demo on a named layout: interactive_demo.py [-v] [layout]"""
    args = list(sys.argv[1:] if argv is None else argv)
    if "-v" in args:
        args.remove("-v")
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")

    name = args[0] if args else "default"
    if name not in LAYOUTS:
        print(f"Unknown layout '{name}'. Available: {', '.join(sorted(LAYOUTS))}")
        return 1
    InteractiveDemo(LAYOUTS[name]).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
