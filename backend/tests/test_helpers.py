"""Tests for grid JSON helpers."""
import pytest
from squarematch.models.grid import CellState, DimensionMismatch, GridState
from squarematch.utils.helpers import (
    format_grid_for_display,
    grid_from_json,
    rules_from_json,
    validate_grid_json,
)


class TestValidateGridJson:
    """Test cases for validate_grid_json."""

    def test_valid(self):
        assert validate_grid_json({"colors": [[0, 1], [1, -1]]}) == (True, None)

    def test_missing_colors(self):
        is_valid, error = validate_grid_json({})
        assert not is_valid
        assert "colors" in error

    def test_bad_color(self):
        is_valid, error = validate_grid_json({"colors": [[0, -2]]})
        assert not is_valid
        assert "(1, 0)" in error

    def test_layer_shape(self):
        is_valid, error = validate_grid_json({"colors": [[0, 1]], "heights": [[1]]})
        assert not is_valid
        assert "heights" in error

    def test_bad_state(self):
        is_valid, _ = validate_grid_json({"colors": [[0]], "states": [["melted"]]})
        assert not is_valid


class TestGridFromJson:
    """Test cases for grid_from_json."""

    def test_builds_grid(self):
        grid = grid_from_json({
            "colors": [[0, 1], [2, 3]],
            "heights": [[2, 1], [1, 1]],
            "states": [["locked", "normal"], ["normal", "normal"]],
            "width": 2,
        })

        assert grid.get(1, 1).color == 3
        assert grid.get(0, 0).height == 2
        assert grid.get(0, 0).state == CellState.LOCKED

    def test_invalid_raises_value_error(self):
        with pytest.raises(ValueError):
            grid_from_json({"colors": [[0], [1, 2]]})

    def test_accepts_serialized_grid(self):
        grid = GridState.from_rows([[0, 1], [1, 0]], heights=[[1, 3], [1, 1]])
        assert grid_from_json(grid.to_dict()).to_dict() == grid.to_dict()

    def test_grid_errors_pass_through(self):
        with pytest.raises(DimensionMismatch):
            GridState.from_rows([[0, 1]], states=[["normal"]])


class TestRulesFromJson:
    """Test cases for rules_from_json."""

    def test_defaults(self):
        rules = rules_from_json(None)
        assert rules.is_static
        assert rules.num_colors == 4

    def test_flags(self):
        rules = rules_from_json({"clear_locked_squares": True, "num_colors": 5, "unknown": 1})
        assert rules.clear_locked_squares
        assert not rules.is_static
        assert rules.num_colors == 5

    def test_zero_colors_rejected(self):
        with pytest.raises(ValueError):
            rules_from_json({"num_colors": 0})

    def test_string_flags(self):
        rules = rules_from_json({"lock_on_match": "false", "enable_gravity": "True"})
        assert not rules.lock_on_match
        assert rules.enable_gravity
        assert rules.is_static

    @pytest.mark.parametrize("value", ["maybe", 2, None, [True]])
    def test_bad_flag_rejected(self, value):
        with pytest.raises(ValueError, match="clear_locked_squares"):
            rules_from_json({"clear_locked_squares": value})


class TestFormatGrid:
    """Test cases for format_grid_for_display."""

    def test_marks(self):
        grid = GridState.from_rows(
            [[0, -1], [1, 2]],
            heights=[[2, 0], [1, 1]],
            states=[["normal", "normal"], ["locked", "normal"]],
        )
        text = format_grid_for_display(grid)

        assert text.splitlines()[0] == "Grid 2x2:"
        assert "^2" in text
        assert "." in text
        assert "*" in text
