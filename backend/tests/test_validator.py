"""Tests for level validation."""
import pytest
from squarematch.core.solver import SolvabilitySolver
from squarematch.core.validator import LevelValidator, get_validator, validate_level
from squarematch.models.grid import GridState
from squarematch.models.level import Rules

from test_solver import ONE_MOVE_ROWS, TWO_MOVE_ROWS


@pytest.fixture
def validator():
    """Create validator instance."""
    return LevelValidator(SolvabilitySolver())


class TestLevelValidator:
    """Test cases for LevelValidator."""

    def test_valid_level(self, validator):
        grid = GridState.from_rows(TWO_MOVE_ROWS)
        validation = validator.validate(grid, move_limit=2, min_solution_depth=2)

        assert validation.valid
        assert validation.solvable
        assert not validation.has_starting_match
        assert validation.solution_length == 2
        assert validation.errors == []

    def test_too_easy(self, validator):
        grid = GridState.from_rows(ONE_MOVE_ROWS)
        validation = validator.validate(grid, move_limit=3, min_solution_depth=2)

        assert not validation.valid
        assert validation.solvable
        assert any("minimum is 2" in e for e in validation.errors)

    def test_one_move_level_without_minimum(self, validator):
        grid = GridState.from_rows(ONE_MOVE_ROWS)
        validation = validator.validate(grid, move_limit=1)
        assert validation.valid

    def test_not_solvable_within_limit(self, validator):
        grid = GridState.from_rows(TWO_MOVE_ROWS)
        validation = validator.validate(grid, move_limit=1)

        assert not validation.valid
        assert not validation.solvable
        assert validation.solution_length is None
        assert any("Not solvable within 1 moves" in e for e in validation.errors)

    def test_starting_match(self, validator):
        grid = GridState.from_rows([[1, 1, 0], [1, 1, 2]])
        validation = validator.validate(grid, move_limit=3)

        assert not validation.valid
        assert validation.has_starting_match
        assert any("already contains" in e for e in validation.errors)

    def test_palette_check(self, validator):
        grid = GridState.from_rows(TWO_MOVE_ROWS)
        validation = validator.validate(grid, move_limit=2, rules=Rules(num_colors=2))

        assert not validation.valid
        assert any("palette" in e for e in validation.errors)

    def test_exhausted_search_reported(self):
        validator = LevelValidator(SolvabilitySolver(max_states_explored=2))
        grid = GridState.from_rows(TWO_MOVE_ROWS)
        validation = validator.validate(grid, move_limit=3)

        assert not validation.valid
        assert any("search stopped" in e for e in validation.errors)

    def test_to_dict(self, validator):
        grid = GridState.from_rows(TWO_MOVE_ROWS)
        data = validator.validate(grid, move_limit=2).to_dict()

        assert data["valid"] is True
        assert len(data["shortest_solution"]) == 2

    def test_module_validate(self):
        grid = GridState.from_rows(TWO_MOVE_ROWS)
        assert validate_level(grid, move_limit=2).valid

    def test_validator_singleton(self):
        assert get_validator() is get_validator()
