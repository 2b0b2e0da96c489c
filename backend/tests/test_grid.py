"""Tests for the grid model."""
import pytest
from squarematch.models.grid import (
    NONE,
    Cell,
    CellState,
    DimensionMismatch,
    EmptyGrid,
    GridState,
    Move,
    OutOfBounds,
    Square,
    is_adjacent,
)


@pytest.fixture
def grid():
    """3x2 grid with distinct colors."""
    return GridState.from_rows([[0, 1, 2], [3, 4, 5]])


class TestGridConstruction:
    """Test cases for building grids."""

    def test_from_rows_dimensions(self, grid):
        assert grid.width == 3
        assert grid.height == 2
        assert len(grid.cells) == 6

    def test_coordinates_are_column_then_row(self, grid):
        """(x, y) addresses column x of row y."""
        assert grid.get(2, 0).color == 2
        assert grid.get(0, 1).color == 3

    def test_colored_cells_default_to_height_one(self, grid):
        cell = grid.get(1, 1)
        assert cell.height == 1
        assert cell.state == CellState.NORMAL

    def test_empty_cells(self):
        grid = GridState.from_rows([[NONE, 1]])
        assert grid.get(0, 0).is_empty
        assert grid.get(0, 0).height == 0

    def test_optional_layers(self):
        grid = GridState.from_rows(
            [[1, 1]],
            heights=[[3, 1]],
            states=[["locked", "normal"]],
        )
        assert grid.get(0, 0).height == 3
        assert grid.get(0, 0).state == CellState.LOCKED

    def test_create_is_empty(self):
        grid = GridState.create(2, 2)
        assert all(cell.is_empty for cell in grid.cells)

    def test_no_rows_raises(self):
        with pytest.raises(EmptyGrid):
            GridState.from_rows([])

    def test_zero_dimensions_raise(self):
        with pytest.raises(EmptyGrid):
            GridState.create(0, 3)

    def test_ragged_rows_raise(self):
        with pytest.raises(DimensionMismatch):
            GridState.from_rows([[1, 2], [3]])

    def test_layer_shape_mismatch_raises(self):
        with pytest.raises(DimensionMismatch):
            GridState.from_rows([[1, 2]], heights=[[1]])

    def test_wrong_cell_count_raises(self):
        with pytest.raises(DimensionMismatch):
            GridState(width=2, height=2, cells=[Cell()])

    def test_grid_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            GridState.from_rows([[1], [2, 3]])


class TestGridAccess:
    """Test cases for reading and writing cells."""

    def test_out_of_bounds_get(self, grid):
        with pytest.raises(OutOfBounds):
            grid.get(3, 0)
        with pytest.raises(OutOfBounds):
            grid.get(0, -1)

    def test_set_none_clears(self, grid):
        grid.set(0, 0, NONE)
        cell = grid.get(0, 0)
        assert cell.is_empty
        assert cell.height == 0

    def test_set_color(self, grid):
        grid.set(1, 0, 7, height=2, state=CellState.LOCKED)
        cell = grid.get(1, 0)
        assert (cell.color, cell.height, cell.state) == (7, 2, CellState.LOCKED)

    def test_swap_moves_colors_only(self):
        grid = GridState.from_rows([[1, 2]], heights=[[3, 1]])
        grid.swap((0, 0), (1, 0))
        assert grid.to_rows() == [[2, 1]]
        assert grid.get(0, 0).height == 3

    def test_swap_twice_restores(self, grid):
        before = grid.to_dict()
        grid.swap((0, 0), (0, 1))
        grid.swap((0, 0), (0, 1))
        assert grid.to_dict() == before

    def test_deep_copy_is_independent(self, grid):
        copy = grid.deep_copy()
        copy.set(0, 0, 9)
        assert grid.get(0, 0).color == 0

    def test_positions_scan_order(self):
        grid = GridState.create(2, 2)
        assert list(grid.positions()) == [(0, 0), (1, 0), (0, 1), (1, 1)]

    def test_to_dict_layers(self, grid):
        data = grid.to_dict()
        assert data["colors"] == [[0, 1, 2], [3, 4, 5]]
        assert data["heights"] == [[1, 1, 1], [1, 1, 1]]
        assert data["states"][0][0] == "normal"


class TestMovesAndSquares:
    """Test cases for moves, adjacency and squares."""

    def test_adjacency(self):
        assert is_adjacent((0, 0), (1, 0))
        assert is_adjacent((2, 3), (2, 2))
        assert not is_adjacent((0, 0), (1, 1))
        assert not is_adjacent((0, 0), (0, 0))

    def test_move_round_trip_dict(self):
        move = Move.from_dict({"from": [1, 2], "to": [1, 3]})
        assert move.src == (1, 2)
        assert move.dst == (1, 3)
        assert move.is_adjacent
        assert move.to_dict() == {"from": [1, 2], "to": [1, 3]}

    def test_square_cells(self):
        square = Square(x=1, y=2, color=0, height=1)
        assert square.cells == ((1, 2), (2, 2), (1, 3), (2, 3))
