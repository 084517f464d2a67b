"""
Test suite for Cell.

Tests cover:
- Construction defaults
- set / add chaining
- copy semantics (tile link, shared user data)
- Coordinate-only equality
- Pathfinding scratch reset
"""

from hexboard import Cell, HexPrism, Tile


class TestCellConstruction:
    """Test Cell initialization."""

    def test_defaults(self):
        cell = Cell()
        assert cell.coords == (0, 0, 0)
        assert cell.h == 1
        assert cell.walkable is True
        assert cell.user_data == {}
        assert cell.tile is None

    def test_scratch_fields_start_clear(self):
        cell = Cell(1, -1, 0)
        assert cell.cost == 0
        assert cell.priority == 0
        assert cell.visited is False
        assert cell.parent is None

    def test_user_data_is_kept(self):
        payload = {"terrain": "forest"}
        cell = Cell(0, 1, -1, h=3, user_data=payload)
        assert cell.user_data is payload
        assert cell.h == 3


class TestCellMutation:
    """Test in-place coordinate operations."""

    def test_set_overwrites_and_chains(self):
        cell = Cell()
        result = cell.set(2, -1, -1)
        assert result is cell
        assert cell.coords == (2, -1, -1)

    def test_add_is_component_wise(self):
        cell = Cell(1, -1, 0)
        result = cell.add(Cell(0, 1, -1))
        assert result is cell
        assert cell.coords == (1, 0, -1)

    def test_add_keeps_cube_invariant(self):
        cell = Cell(3, -2, -1).add(Cell(-2, 1, 1))
        assert cell.q + cell.r + cell.s == 0


class TestCellCopy:
    """Test copy semantics."""

    def test_copy_takes_coordinates_height_walkable(self):
        src = Cell(2, -2, 0, h=4)
        src.walkable = False
        dst = Cell().copy(src)
        assert dst.coords == (2, -2, 0)
        assert dst.h == 4
        assert dst.walkable is False

    def test_copy_shares_user_data(self):
        src = Cell(user_data={"gold": 3})
        dst = Cell().copy(src)
        assert dst.user_data is src.user_data

    def test_copy_points_at_same_tile_without_moving_it(self):
        src = Cell(1, 0, -1)
        tile = Tile(src, HexPrism(corners=(), depth=1))
        dst = Cell().copy(src)
        assert dst.tile is tile
        assert tile.cell is src

    def test_clone_is_a_new_object(self):
        src = Cell(1, -1, 0, h=2)
        twin = src.clone()
        assert twin is not src
        assert twin.equals(src)
        assert twin.h == 2


class TestCellEquality:
    """Test coordinate equality."""

    def test_equals_ignores_height_and_walkable(self):
        a = Cell(1, -1, 0, h=1)
        b = Cell(1, -1, 0, h=7)
        b.walkable = False
        assert a.equals(b)

    def test_not_equal_when_coordinates_differ(self):
        assert not Cell(1, -1, 0).equals(Cell(-1, 1, 0))


class TestCellPathScratch:
    def test_reset_path_clears_scratch(self):
        cell = Cell()
        cell.cost = 5
        cell.priority = 9
        cell.visited = True
        cell.parent = Cell(1, -1, 0)
        cell.reset_path()
        assert cell.cost == 0
        assert cell.priority == 0
        assert cell.visited is False
        assert cell.parent is None
