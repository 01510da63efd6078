"""Tests for the interactive demo's key handling (no terminal needed)."""

import pytest
from rich.panel import Panel

from grid_parser import parse_field
from grid_types import CellKind, FieldConfig, Position
from interactive_demo import LAYOUTS, InteractiveDemo, blank_layout, default_layout


@pytest.fixture
def demo() -> InteractiveDemo:
    return InteractiveDemo("...|...|...")


class TestKeyHandling:
    """Tests for InteractiveDemo.handle_key."""

    def test_cursor_moves(self, demo: InteractiveDemo) -> None:
        """D and S move right and down; the overlay follows the cursor."""
        assert demo.handle_key("d")
        assert demo.handle_key("s")
        assert demo.cursor == Position(1, 1)
        assert Position(1, 1) in demo.overlay
        assert Position(0, 0) not in demo.overlay

    def test_cursor_stops_at_edge(self, demo: InteractiveDemo) -> None:
        """Moving off the grid leaves the cursor in place."""
        demo.handle_key("a")
        assert demo.cursor == Position(0, 0)
        assert demo.status_message == "Edge of grid"

    def test_uppercase_keys(self, demo: InteractiveDemo) -> None:
        """Keys are case-insensitive."""
        demo.handle_key("D")
        assert demo.cursor == Position(1, 0)

    def test_toggle_source_relabels(self, demo: InteractiveDemo) -> None:
        """E places a source and the whole grid is relabeled."""
        demo.handle_key("e")
        assert demo.field.kind_at(Position(0, 0)) is CellKind.SOURCE
        assert demo.field.distance_at(Position(2, 2)) == 5
        assert demo.status_message == "✓ Source placed"

        demo.handle_key("e")
        assert demo.field.sources == ()
        assert demo.status_message == "✓ Source removed"

    def test_toggle_barrier_relabels(self, demo: InteractiveDemo) -> None:
        """X places a barrier; labels route around it."""
        demo.handle_key("e")
        demo.handle_key("d")
        demo.handle_key("x")
        assert demo.field.kind_at(Position(1, 0)) is CellKind.BARRIER
        assert demo.field.distance_at(Position(2, 0)) == 5
        assert demo.status_message == "✓ Barrier placed"

    def test_toggle_active(self, demo: InteractiveDemo) -> None:
        """F switches a plain cell to ACTIVE and back."""
        demo.handle_key("f")
        assert demo.field.kind_at(Position(0, 0)) is CellKind.ACTIVE
        demo.handle_key("f")
        assert demo.field.kind_at(Position(0, 0)) is CellKind.INACTIVE

    def test_toggle_active_on_source_reports_error(self, demo: InteractiveDemo) -> None:
        """F on a source leaves it alone and says why."""
        demo.handle_key("e")
        demo.handle_key("f")
        assert demo.field.kind_at(Position(0, 0)) is CellKind.SOURCE
        assert demo.status_message == "✗ Cannot highlight a source cell"

    def test_clear_and_reset(self) -> None:
        """C blanks the grid; R restores the starting layout."""
        demo = InteractiveDemo("S#.")
        demo.handle_key("c")
        assert demo.field.sources == ()
        assert demo.field.kind_at(Position(1, 0)) is CellKind.INACTIVE

        demo.handle_key("r")
        assert demo.field.sources == (Position(0, 0),)
        assert demo.field.kind_at(Position(1, 0)) is CellKind.BARRIER

    def test_quit(self, demo: InteractiveDemo) -> None:
        """Q stops the loop."""
        assert demo.handle_key("q") is False

    def test_unknown_key(self, demo: InteractiveDemo) -> None:
        assert demo.handle_key("z") is True
        assert demo.status_message == "Unknown key: 'z'"

    def test_invariants_hold_after_edits(self, demo: InteractiveDemo) -> None:
        """Any key sequence leaves the field consistent."""
        for key in "edxsexdfaxe":
            demo.handle_key(key)
            demo.field.check_invariants()


class TestDisplay:
    """Tests for the rich display panel."""

    def test_generate_display(self, demo: InteractiveDemo) -> None:
        demo.handle_key("e")
        panel = demo.generate_display()
        assert isinstance(panel, Panel)
        assert "Source placed" in panel.renderable.plain

    def test_cell_width_from_config(self) -> None:
        """The configured cell width is used for the grid."""
        demo = InteractiveDemo("S.", FieldConfig(rows=1, cols=2, cell_width=5))
        assert demo.config.cell_width == 5
        assert "  1  " in demo.generate_display().renderable.plain


class TestLayouts:
    """Tests for the built-in starting layouts."""

    @pytest.mark.parametrize("name", sorted(LAYOUTS))
    def test_layouts_parse(self, name: str) -> None:
        field = parse_field(LAYOUTS[name])
        field.check_invariants()

    def test_default_layout(self) -> None:
        """The default layout is a 10x10 grid with a barrier in the corner."""
        field = parse_field(LAYOUTS["default"])
        assert (field.rows, field.cols) == (10, 10)
        assert field.kind_at(Position(0, 0)) is CellKind.BARRIER
        assert field.sources == ()

    def test_layout_helpers(self) -> None:
        config = FieldConfig(rows=2, cols=3)
        assert blank_layout(config) == "...|..."
        assert default_layout(config) == "#..|..."
