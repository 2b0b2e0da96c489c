"""Level validation built on the solvability search."""
import logging
from typing import List, Optional

from ..models.grid import NONE, GridState
from ..models.level import LevelValidation, Rules
from .matcher import has_square
from .solver import SolvabilitySolver, get_solver

logger = logging.getLogger(__name__)


class LevelValidator:
    """Checks that a starting grid is an unsolved, solvable, non-obvious puzzle."""

    def __init__(self, solver: Optional[SolvabilitySolver] = None):
        self.solver = solver or SolvabilitySolver()

    def validate(
        self,
        grid: GridState,
        move_limit: int,
        rules: Optional[Rules] = None,
        min_solution_depth: int = 0,
    ) -> LevelValidation:
        """
        Validate a level's starting grid.

        A level is invalid if it already holds a square, cannot be solved
        within move_limit swaps, or its shortest solution is shorter than
        min_solution_depth. With rules supplied, colors outside the rules'
        palette are reported too.

        Args:
            grid: Starting grid.
            move_limit: Moves the player is given.
            rules: Level rules, used for the palette check.
            min_solution_depth: Shortest acceptable solution length.

        Returns:
            LevelValidation with every error found.
        """
        errors: List[str] = []

        if rules is not None:
            errors.extend(self._check_palette(grid, rules.num_colors))

        has_starting_match = has_square(grid)
        if has_starting_match:
            errors.append("Grid already contains a square")

        result = self.solver.solve(grid, move_limit)
        if not result.solvable:
            reason = f"Not solvable within {move_limit} moves"
            if result.exhausted:
                reason += f" (search stopped after {result.states_explored} states)"
            errors.append(reason)
        elif not has_starting_match and result.solution_length < min_solution_depth:
            errors.append(
                f"Shortest solution takes {result.solution_length} moves, "
                f"minimum is {min_solution_depth}"
            )

        validation = LevelValidation(
            valid=not errors,
            solvable=result.solvable,
            has_starting_match=has_starting_match,
            shortest_solution=list(result.moves),
            errors=errors,
            states_explored=result.states_explored,
        )
        logger.debug(f"Validated {grid.width}x{grid.height} grid: {errors or 'valid'}")
        return validation

    @staticmethod
    def _check_palette(grid: GridState, num_colors: int) -> List[str]:
        errors = []
        for x, y in grid.positions():
            color = grid.get(x, y).color
            if color != NONE and not 0 <= color < num_colors:
                errors.append(
                    f"Color {color} at ({x}, {y}) is outside the {num_colors}-color palette"
                )
        return errors


def validate_level(
    grid: GridState,
    move_limit: int,
    rules: Optional[Rules] = None,
    min_solution_depth: int = 0,
) -> LevelValidation:
    """Validate with the shared solver."""
    return get_validator().validate(grid, move_limit, rules, min_solution_depth)


# Singleton instance
_validator = None


def get_validator() -> LevelValidator:
    """Get or create validator singleton instance."""
    global _validator
    if _validator is None:
        _validator = LevelValidator(get_solver())
    return _validator
