"""Reverse-solve puzzle generator with noise injection."""
import logging
import random
import time
from typing import List, Optional, Sequence, Set, Tuple

from ..config import get_settings
from ..models.grid import GridState, Move, OutOfBounds, Position
from ..models.level import GenerationResult, Rules
from .matcher import find_squares, has_square
from .validator import LevelValidator, get_validator
from ..utils.helpers import format_grid_for_display

logger = logging.getLogger(__name__)


class PuzzleGenerator:
    """
    Builds starting grids that are solvable but not trivially so.

    A goal grid holding a square is walked backwards through a known
    solution. Because every swap is its own inverse, replaying the
    solution forward always rebuilds the goal. Cells the solution never
    touches are then recolored for variety, and the candidate is checked
    by the level validator before it is accepted.
    """

    NOISE_ATTEMPTS = 10
    MAX_ATTEMPTS = 20

    def __init__(
        self,
        validator: Optional[LevelValidator] = None,
        noise_attempts: int = NOISE_ATTEMPTS,
        max_attempts: int = MAX_ATTEMPTS,
    ):
        self.validator = validator or LevelValidator()
        self.noise_attempts = noise_attempts
        self.max_attempts = max_attempts

    def generate(
        self,
        goal_grid: GridState,
        solution_moves: Sequence[Move],
        num_colors: int,
        max_attempts: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> GenerationResult:
        """
        Generate a starting grid from a goal grid and its solution.

        Args:
            goal_grid: Grid containing the intended square(s).
            solution_moves: Forward swaps that turn the start into the goal.
            num_colors: Palette size for noise recoloring.
            max_attempts: Noise/validation rounds before giving up.
            rng: Random source for noise; a fresh one if omitted.

        Returns:
            GenerationResult; success is False with a failure_reason when
            no valid grid was produced.

        Raises:
            OutOfBounds: If a solution move leaves the goal grid.
        """
        start_time = time.time()
        attempts_allowed = self.max_attempts if max_attempts is None else max_attempts
        rng = rng or random.Random()
        moves = list(solution_moves)

        def failure(reason: str, attempts: int = 0, validation=None) -> GenerationResult:
            logger.warning(f"Generation failed after {attempts} attempts: {reason}")
            return GenerationResult(
                success=False,
                solution=moves,
                attempts=attempts,
                failure_reason=reason,
                validation=validation,
                generation_time_ms=int((time.time() - start_time) * 1000),
            )

        if not moves:
            return failure("At least one solution move is required")
        for move in moves:
            for x, y in (move.src, move.dst):
                if not goal_grid.in_bounds(x, y):
                    raise OutOfBounds(x, y, goal_grid.width, goal_grid.height)
            if not move.is_adjacent:
                return failure(f"Move {move.src} -> {move.dst} is not between adjacent cells")

        goal_squares = find_squares(goal_grid)
        if not goal_squares:
            return failure("Goal grid contains no square")

        critical = self._critical_cells(goal_squares, moves)
        rules = Rules(num_colors=num_colors)
        validation = None

        for attempt in range(1, attempts_allowed + 1):
            candidate = self._reverse_solve(goal_grid, moves)
            self._inject_noise(candidate, critical, num_colors, rng)

            validation = self.validator.validate(
                candidate,
                move_limit=len(moves),
                rules=rules,
                min_solution_depth=len(moves),
            )
            if validation.valid:
                logger.info(
                    f"Generated {candidate.width}x{candidate.height} puzzle "
                    f"(depth {len(moves)}) in {attempt} attempts"
                )
                logger.debug(format_grid_for_display(candidate))
                return GenerationResult(
                    success=True,
                    grid=candidate,
                    solution=moves,
                    attempts=attempt,
                    validation=validation,
                    generation_time_ms=int((time.time() - start_time) * 1000),
                )
            logger.debug(f"Attempt {attempt} rejected: {validation.errors}")

        return failure(
            "; ".join(validation.errors) if validation else "No attempts made",
            attempts_allowed,
            validation,
        )

    def generate_puzzle(
        self,
        width: int,
        height: int,
        num_colors: int,
        depth: int,
        rng: Optional[random.Random] = None,
        max_attempts: Optional[int] = None,
    ) -> GenerationResult:
        """
        Generate a puzzle from scratch, falling back to a random grid.

        Each attempt builds a fresh procedural goal and runs one
        reverse-solve round on it. When every attempt fails, the result
        carries an unvalidated match-free random grid with fallback=True
        and success=False.
        """
        start_time = time.time()
        rng = rng or random.Random()
        attempts_allowed = self.max_attempts if max_attempts is None else max_attempts
        last_reason = ""

        for attempt in range(1, attempts_allowed + 1):
            goal, moves = build_goal(width, height, num_colors, depth, rng)
            if len(moves) < depth:
                last_reason = f"Scramble stopped after {len(moves)} of {depth} moves"
                continue
            result = self.generate(goal, moves, num_colors, max_attempts=1, rng=rng)
            if result.success:
                result.attempts = attempt
                result.generation_time_ms = int((time.time() - start_time) * 1000)
                return result
            last_reason = result.failure_reason

        logger.warning(
            f"Falling back to a random {width}x{height} grid after "
            f"{attempts_allowed} attempts: {last_reason}"
        )
        return GenerationResult(
            success=False,
            grid=build_random_grid(width, height, num_colors, rng),
            attempts=attempts_allowed,
            failure_reason=last_reason,
            fallback=True,
            generation_time_ms=int((time.time() - start_time) * 1000),
        )

    def _reverse_solve(self, goal_grid: GridState, moves: List[Move]) -> GridState:
        """Undo the solution on a copy of the goal, last move first."""
        candidate = goal_grid.deep_copy()
        for move in reversed(moves):
            candidate.swap(move.src, move.dst)
        return candidate

    @staticmethod
    def _critical_cells(goal_squares, moves: List[Move]) -> Set[Position]:
        """Cells the solution depends on: move endpoints and goal squares."""
        critical: Set[Position] = set()
        for move in moves:
            critical.add(move.src)
            critical.add(move.dst)
        for square in goal_squares:
            critical.update(square.cells)
        return critical

    def _inject_noise(
        self,
        grid: GridState,
        critical: Set[Position],
        num_colors: int,
        rng: random.Random,
    ) -> None:
        """Recolor free cells, keeping only recolors that leave the grid match-free."""
        for x, y in grid.positions():
            if (x, y) in critical:
                continue
            cell = grid.get(x, y)
            if cell.is_empty:
                continue
            for _ in range(self.noise_attempts):
                prior = cell.color
                cell.color = rng.randrange(num_colors)
                if not has_square(grid):
                    break
                cell.color = prior


def build_random_grid(
    width: int, height: int, num_colors: int, rng: Optional[random.Random] = None
) -> GridState:
    """
    Fill a grid with random colors and no squares.

    Cells are placed in scan order; a color is excluded when the up-left,
    up and left neighbours already share it.

    Raises:
        ValueError: If a single color cannot fill a grid without squares.
    """
    rng = rng or random.Random()
    grid = GridState.create(width, height)
    if num_colors < 2 and width > 1 and height > 1:
        raise ValueError("At least 2 colors are needed to avoid squares")

    for x, y in grid.positions():
        available = list(range(num_colors))
        if x > 0 and y > 0:
            left = grid.get(x - 1, y).color
            if left == grid.get(x, y - 1).color == grid.get(x - 1, y - 1).color:
                available.remove(left)
        grid.set(x, y, rng.choice(available))
    return grid


def build_goal(
    width: int,
    height: int,
    num_colors: int,
    depth: int,
    rng: Optional[random.Random] = None,
) -> Tuple[GridState, List[Move]]:
    """
    Build a procedural goal grid and a forward solution of up to depth swaps.

    One square is stamped onto a random match-free grid, then the board is
    scrambled outward from it: each swap touches the square or a cell an
    earlier swap moved, and exchanges two different colors. The scramble,
    read in order, is the forward solution from the scrambled start.
    """
    rng = rng or random.Random()
    if width < 2 or height < 2:
        raise ValueError(f"A {width}x{height} grid cannot hold a square")

    goal = build_random_grid(width, height, num_colors, rng)
    sx = rng.randrange(width - 1)
    sy = rng.randrange(height - 1)
    color = rng.randrange(num_colors)
    for dx, dy in ((0, 0), (1, 0), (0, 1), (1, 1)):
        goal.set(sx + dx, sy + dy, color)

    region: Set[Position] = {(sx, sy), (sx + 1, sy), (sx, sy + 1), (sx + 1, sy + 1)}
    current = goal.deep_copy()
    scramble: List[Move] = []

    for _ in range(depth):
        candidates = []
        for x, y in current.positions():
            for nx, ny in ((x + 1, y), (x, y + 1)):
                if not current.in_bounds(nx, ny):
                    continue
                if (x, y) not in region and (nx, ny) not in region:
                    continue
                if current.get(x, y).color == current.get(nx, ny).color:
                    continue
                move = Move(src=(x, y), dst=(nx, ny))
                if scramble and move == scramble[-1]:
                    continue
                candidates.append(move)
        if not candidates:
            break
        move = rng.choice(candidates)
        current.swap(move.src, move.dst)
        region.update((move.src, move.dst))
        scramble.append(move)

    # Undoing the scramble, last swap first, leads from `current` back to `goal`
    return goal, list(reversed(scramble))


def generate(
    goal_grid: GridState,
    solution_moves: Sequence[Move],
    num_colors: int,
    max_attempts: int = PuzzleGenerator.MAX_ATTEMPTS,
    rng: Optional[random.Random] = None,
) -> GenerationResult:
    """Reverse-solve generation with the shared generator."""
    return get_generator().generate(goal_grid, solution_moves, num_colors, max_attempts, rng)


# Singleton instance
_generator = None


def get_generator() -> PuzzleGenerator:
    """Get or create generator singleton instance."""
    global _generator
    if _generator is None:
        settings = get_settings()
        _generator = PuzzleGenerator(
            validator=get_validator(),
            noise_attempts=settings.noise_attempts,
            max_attempts=settings.generator_max_attempts,
        )
    return _generator
