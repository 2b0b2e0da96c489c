"""Tests for the solvability search."""
import pytest
from squarematch.core.matcher import has_square
from squarematch.core.solver import SearchNode, SolvabilitySolver, get_solver, solve, state_hash
from squarematch.models.grid import GridState, Move

# Solved by swapping (0, 0) with (1, 0), which completes a square at (1, 0)
ONE_MOVE_ROWS = [
    [0, 1, 0, 2],
    [1, 0, 0, 1],
    [2, 1, 2, 0],
    [0, 2, 1, 2],
]

# No single swap creates a square; (3, 1)-(3, 2) then (2, 3)-(1, 3) does
TWO_MOVE_ROWS = [
    [1, 0, 1, 2],
    [0, 0, 2, 1],
    [1, 2, 1, 2],
    [2, 1, 2, 1],
]


@pytest.fixture
def solver():
    """Create solver instance."""
    return SolvabilitySolver(max_states_explored=10000)


def replay(grid, moves):
    board = grid.deep_copy()
    for move in moves:
        board.swap(move.src, move.dst)
    return board


class TestStateHash:
    """Test cases for the state hash."""

    def test_polynomial(self):
        assert state_hash([]) == 0
        assert state_hash([1, 2]) == 33

    def test_order_sensitive(self):
        assert state_hash([1, 2, 3]) != state_hash([3, 2, 1])


class TestSearchNode:
    """Test cases for path reconstruction."""

    def test_path_forward_order(self):
        first = Move(src=(0, 0), dst=(1, 0))
        second = Move(src=(1, 0), dst=(1, 1))
        root = SearchNode(colors=(0,))
        child = SearchNode(colors=(1,), move_count=1, last_move=first, parent=root)
        grandchild = SearchNode(colors=(2,), move_count=2, last_move=second, parent=child)

        assert grandchild.path() == [first, second]
        assert root.path() == []


class TestSolvabilitySolver:
    """Test cases for SolvabilitySolver."""

    def test_one_move_solution(self, solver):
        grid = GridState.from_rows(ONE_MOVE_ROWS)
        result = solver.solve(grid, max_moves=1)

        assert result.solvable
        assert result.solution_length == 1
        assert result.moves == [Move(src=(0, 0), dst=(1, 0))]
        assert result.states_explored == 2
        assert result.is_trivial

    def test_unsolvable_in_one(self, solver):
        grid = GridState.from_rows(TWO_MOVE_ROWS)
        result = solver.solve(grid, max_moves=1)

        assert not result.solvable
        assert result.solution_length is None
        assert result.moves == []
        assert not result.exhausted

    def test_two_move_solution(self, solver):
        grid = GridState.from_rows(TWO_MOVE_ROWS)
        result = solver.solve(grid, max_moves=3)

        assert result.solvable
        assert result.solution_length == 2
        assert not result.is_trivial
        assert has_square(replay(grid, result.moves))
        assert all(move.is_adjacent for move in result.moves)

    def test_known_two_move_path_solves(self):
        grid = GridState.from_rows(TWO_MOVE_ROWS)
        moves = [Move(src=(3, 1), dst=(3, 2)), Move(src=(2, 3), dst=(1, 3))]
        assert has_square(replay(grid, moves))

    def test_starting_square(self, solver):
        grid = GridState.from_rows([[1, 1, 0], [1, 1, 2]])
        result = solver.solve(grid, max_moves=3)

        assert result.solvable
        assert result.solution_length == 0
        assert result.moves == []
        assert result.states_explored == 1

    def test_zero_moves(self, solver):
        grid = GridState.from_rows(ONE_MOVE_ROWS)
        result = solver.solve(grid, max_moves=0)

        assert not result.solvable
        assert result.states_explored == 1

    def test_state_budget_exhausted(self, solver):
        grid = GridState.from_rows(TWO_MOVE_ROWS)
        result = solver.solve(grid, max_moves=3, max_states_explored=2)

        assert not result.solvable
        assert result.exhausted
        assert result.states_explored == 2

    def test_exact_keys_agree(self):
        grid = GridState.from_rows(TWO_MOVE_ROWS)
        result = SolvabilitySolver(exact_keys=True).solve(grid, max_moves=2)

        assert result.solvable
        assert result.solution_length == 2

    def test_start_grid_untouched(self, solver):
        grid = GridState.from_rows(TWO_MOVE_ROWS)
        solver.solve(grid, max_moves=2)
        assert grid.to_rows() == TWO_MOVE_ROWS

    def test_locked_cells_are_not_swapped(self, solver):
        rows = [[1, 1], [2, 1], [1, 2]]
        free = GridState.from_rows(rows)
        locked = GridState.from_rows(
            rows,
            states=[["normal", "normal"], ["normal", "normal"], ["locked", "normal"]],
        )

        assert solver.solve(free, max_moves=1).solvable
        assert not solver.solve(locked, max_moves=1).solvable

    def test_result_to_dict(self, solver):
        grid = GridState.from_rows(ONE_MOVE_ROWS)
        data = solver.solve(grid, max_moves=1).to_dict()

        assert data["solvable"] is True
        assert data["moves"] == [{"from": [0, 0], "to": [1, 0]}]

    def test_module_solve(self):
        grid = GridState.from_rows(ONE_MOVE_ROWS)
        assert solve(grid, max_moves=1).solution_length == 1

    def test_solver_singleton(self):
        assert get_solver() is get_solver()
