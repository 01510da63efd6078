"""Tests for ascii_render module."""

import re

import pytest

from ascii_render import (
    Overlay,
    cell_colorizer,
    cell_text,
    render_distances,
    render_field,
)
from grid_parser import parse_field
from grid_types import CellKind, CellView, Position

ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE.sub("", text)


class TestOverlay:
    """Tests for the display overlay."""

    def test_highlight_and_clear(self) -> None:
        overlay = Overlay()
        overlay.highlight(Position(1, 1))
        overlay.highlight(Position(0, 0))
        assert Position(1, 1) in overlay
        assert len(overlay) == 2

        overlay.unhighlight(Position(1, 1))
        assert Position(1, 1) not in overlay

        overlay.clear()
        assert len(overlay) == 0

    def test_move_keeps_single_cursor(self) -> None:
        """move() leaves exactly one highlighted position."""
        overlay = Overlay([Position(0, 0), Position(1, 0)])
        overlay.move(Position(2, 2))
        assert len(overlay) == 1
        assert Position(2, 2) in overlay

    def test_overlay_does_not_touch_field(self) -> None:
        """Highlighting changes nothing the engine can see."""
        field = parse_field("S..")
        before = field.cells()
        overlay = Overlay([Position(1, 0)])
        render_field(field, overlay=overlay)
        assert field.cells() == before


class TestCellText:
    """Tests for per-cell labels."""

    @pytest.mark.parametrize(
        "view,expected",
        [
            (CellView(Position(0, 0), CellKind.BARRIER, None), " # "),
            (CellView(Position(0, 0), CellKind.INACTIVE, None), " . "),
            (CellView(Position(0, 0), CellKind.SOURCE, 1), " 1 "),
            (CellView(Position(0, 0), CellKind.ACTIVE, 5), " 5 "),
        ],
    )
    def test_labels(self, view: CellView, expected: str) -> None:
        assert cell_text(view) == expected

    def test_two_digit_label(self) -> None:
        """Two-digit labels fill the cell with one pad character."""
        text = cell_text(CellView(Position(0, 0), CellKind.INACTIVE, 12))
        assert len(text) == 3
        assert text.strip() == "12"

    def test_width_one(self) -> None:
        """Single-character cells are not padded."""
        assert cell_text(CellView(Position(0, 0), CellKind.INACTIVE, 7), cell_width=1) == "7"

    def test_too_wide(self) -> None:
        """Labels wider than the cell are replaced by a filler."""
        assert cell_text(CellView(Position(0, 0), CellKind.INACTIVE, 100), cell_width=2) == "++"

    def test_colorizer_keeps_text(self) -> None:
        """Coloring adds escape codes at most; the label survives."""
        for view in [
            CellView(Position(0, 0), CellKind.BARRIER, None),
            CellView(Position(0, 0), CellKind.SOURCE, 1),
            CellView(Position(0, 0), CellKind.INACTIVE, None),
            CellView(Position(0, 0), CellKind.INACTIVE, 9),
            CellView(Position(0, 0), CellKind.ACTIVE, 2),
        ]:
            assert strip_ansi(cell_colorizer(view)(" x ")) == " x "


class TestRenderField:
    """Tests for the bordered field rendering."""

    def test_plain_render(self) -> None:
        """A one-row field without color or title."""
        field = parse_field("S..")
        output = render_field(field, title="", color=False)
        assert output.split("\n") == [
            "┌─────────┐",
            "│ 1  2  3 │",
            "└─────────┘",
        ]

    def test_title_centered(self) -> None:
        """The title sits in the middle of the top border."""
        field = parse_field("S..")
        top = render_field(field, title="ab", color=False).split("\n")[0]
        assert top == "┌── ab ───┐"

    def test_title_too_long_is_dropped(self) -> None:
        """A title wider than the grid leaves a plain border."""
        field = parse_field("S")
        top = render_field(field, title="much too long", color=False).split("\n")[0]
        assert top == "┌───┐"

    def test_highlight_plain(self) -> None:
        """Without color, highlighted cells are bracketed."""
        field = parse_field("S..|.#.")
        output = render_field(field, title="", overlay=Overlay([Position(1, 1)]), color=False)
        assert output.split("\n")[2] == "│ 2 [#] 4 │"

    def test_color_render_matches_plain_text(self) -> None:
        """Colored output carries the same characters as plain output."""
        field = parse_field("S.#|+..")
        overlay = Overlay([Position(2, 1)])
        colored = render_field(field, overlay=overlay)
        plain = render_field(field, overlay=overlay, color=False)
        assert strip_ansi(colored).replace("[", " ").replace("]", " ") == plain.replace(
            "[", " "
        ).replace("]", " ")

    def test_unreachable_cells(self) -> None:
        """Cells the flood cannot reach show as '.'."""
        field = parse_field("S#.")
        assert render_field(field, title="", color=False).split("\n")[1] == "│ 1  #  . │"


class TestRenderDistances:
    """Tests for the plain distance table."""

    def test_table(self) -> None:
        field = parse_field("S#.|...")
        assert render_distances(field) == "1 # 5\n2 3 4"

    def test_right_aligned(self) -> None:
        """Columns are padded to the widest label."""
        field = parse_field("S.........")
        assert render_distances(field).split(" ")[-1] == "10"
        assert render_distances(field).startswith(" 1  2")

    def test_explicit_width(self) -> None:
        field = parse_field("S.")
        assert render_distances(field, width=3) == "  1   2"
