"""Cascade resolution engine: match, resolve, gravity, refill."""
import logging
import random
from typing import List, Optional, Tuple, Union

from ..config import get_settings
from ..models.grid import CellState, GridState, Position, Square, is_adjacent
from ..models.level import Rules
from ..models.results import (
    CascadeEvent,
    GravityEvent,
    MatchEvent,
    RefillEvent,
    ResolveAction,
    ResolveEvent,
    ResolveResult,
    SwapOutcome,
    TileMove,
)
from .matcher import find_squares, has_square

logger = logging.getLogger(__name__)

RandomSource = Union[int, random.Random, None]


def _as_rng(rng_seed: RandomSource) -> random.Random:
    """Use a caller-owned Random as is, otherwise seed a fresh one."""
    if isinstance(rng_seed, random.Random):
        return rng_seed
    return random.Random(rng_seed)


class CascadeResolver:
    """Runs cascade waves until the board is stable or the ceiling is hit."""

    BASE_POINTS = 10
    MAX_CASCADE_WAVES = 10

    def __init__(self, base_points: int = BASE_POINTS, max_cascade_waves: int = MAX_CASCADE_WAVES):
        self.base_points = base_points
        self.max_cascade_waves = max_cascade_waves

    def resolve(
        self,
        initial_grid: GridState,
        rules: Rules,
        rng_seed: RandomSource = None,
        max_cascade_waves: Optional[int] = None,
    ) -> ResolveResult:
        """
        Resolve every cascade wave starting from initial_grid.

        The input grid is not modified. With the same grid, rules and seed
        the final grid and event log are identical across runs.

        Args:
            initial_grid: Grid to resolve, usually right after a swap.
            rules: Mechanic flags and refill color count.
            rng_seed: Integer seed or a caller-managed random.Random.
            max_cascade_waves: Wave ceiling; defaults to the resolver's.

        Returns:
            ResolveResult with the final grid, score, and event log.
        """
        max_waves = self.max_cascade_waves if max_cascade_waves is None else max_cascade_waves
        rng = _as_rng(rng_seed)
        grid = initial_grid.deep_copy()
        events: List[CascadeEvent] = []
        total_score = 0.0
        squares_created = 0
        depth = 0
        stable = False

        for wave in range(max_waves):
            squares = find_squares(grid)
            if not squares:
                stable = True
                break

            wave_score = len(squares) * self.base_points * rules.cascade_score_multiplier ** wave
            total_score += wave_score
            squares_created += len(squares)
            depth += 1
            events.append(MatchEvent(wave=wave, squares=tuple(squares), score=wave_score))

            actions = self._resolve_squares(grid, squares, rules)
            events.append(ResolveEvent(wave=wave, cells=tuple(actions)))

            if rules.is_static:
                # Matches neither lock nor clear: single-wave mode
                stable = True
                break

            if rules.enable_gravity:
                moves = self._apply_gravity(grid)
                if moves:
                    events.append(GravityEvent(wave=wave, moves=tuple(moves)))

            if rules.refill_from_top:
                tiles = self._refill(grid, rules.num_colors, rng)
                if tiles:
                    events.append(RefillEvent(wave=wave, tiles=tuple(tiles)))

            logger.debug(
                f"Wave {wave}: {len(squares)} squares, score {wave_score:g}, "
                f"total {total_score:g}"
            )
        else:
            stable = not has_square(grid)
            if not stable:
                logger.warning(
                    f"Cascade hit the {max_waves}-wave ceiling without settling "
                    f"({squares_created} squares, score {total_score:g})"
                )

        return ResolveResult(
            final_state=grid,
            squares_created=squares_created,
            cascade_depth=depth,
            total_score=total_score,
            stable=stable,
            events=tuple(events),
        )

    def play_swap(
        self,
        grid: GridState,
        a: Position,
        b: Position,
        rules: Rules,
        rng_seed: RandomSource = None,
        max_cascade_waves: Optional[int] = None,
    ) -> SwapOutcome:
        """
        Apply a player swap and resolve it if it creates a square.

        A swap is legal only between adjacent, non-empty, NORMAL cells and
        only if it produces at least one square. Illegal swaps leave no
        trace: the trial swap is undone by swapping again.
        """
        first = grid.get(*a)
        second = grid.get(*b)
        if not is_adjacent(a, b):
            return SwapOutcome(legal=False, reason="cells are not adjacent")
        if first.is_empty or second.is_empty:
            return SwapOutcome(legal=False, reason="cannot swap an empty cell")
        if first.state != CellState.NORMAL or second.state != CellState.NORMAL:
            return SwapOutcome(legal=False, reason="cannot swap a locked or clearing cell")

        trial = grid.deep_copy()
        trial.swap(a, b)
        if not has_square(trial):
            trial.swap(a, b)
            return SwapOutcome(legal=False, reason="swap does not create a square")

        result = self.resolve(trial, rules, rng_seed, max_cascade_waves)
        return SwapOutcome(legal=True, result=result)

    def _resolve_squares(
        self, grid: GridState, squares: List[Square], rules: Rules
    ) -> List[Tuple[Position, ResolveAction]]:
        """Lock, shrink, clear, or reset the cells of every matched square."""
        actions: List[Tuple[Position, ResolveAction]] = []
        for square in squares:
            for x, y in square.cells:
                cell = grid.get(x, y)
                if rules.lock_on_match and not rules.clear_locked_squares:
                    cell.state = CellState.LOCKED
                    actions.append(((x, y), ResolveAction.LOCK))
                elif rules.clear_locked_squares:
                    if cell.height > 1:
                        cell.height -= 1
                        cell.state = CellState.NORMAL
                        actions.append(((x, y), ResolveAction.DECREMENT))
                    else:
                        cell.clear()
                        actions.append(((x, y), ResolveAction.CLEAR))
                else:
                    cell.state = CellState.NORMAL
                    actions.append(((x, y), ResolveAction.RESET))
        return actions

    def _apply_gravity(self, grid: GridState) -> List[TileMove]:
        """Compact every column toward the bottom row, keeping tile order."""
        moves: List[TileMove] = []
        for x in range(grid.width):
            filled = [
                (y, grid.get(x, y).copy())
                for y in range(grid.height)
                if not grid.get(x, y).is_empty
            ]
            first_row = grid.height - len(filled)
            for y in range(first_row):
                grid.get(x, y).clear()
            for offset, (old_y, cell) in enumerate(filled):
                new_y = first_row + offset
                grid.set(x, new_y, cell.color, cell.height, cell.state)
                if new_y != old_y:
                    moves.append(TileMove(src=(x, old_y), dst=(x, new_y)))
        return moves

    def _refill(
        self, grid: GridState, num_colors: int, rng: random.Random
    ) -> List[Tuple[Position, int]]:
        """Spawn a random tile into every empty cell, in scan order."""
        spawned: List[Tuple[Position, int]] = []
        for x, y in grid.positions():
            if grid.get(x, y).is_empty:
                color = rng.randrange(num_colors)
                grid.set(x, y, color, 1, CellState.NORMAL)
                spawned.append(((x, y), color))
        return spawned


def resolve(
    initial_grid: GridState,
    rules: Rules,
    rng_seed: RandomSource = None,
    max_cascade_waves: int = CascadeResolver.MAX_CASCADE_WAVES,
) -> ResolveResult:
    """Resolve cascades with a default resolver."""
    return CascadeResolver().resolve(initial_grid, rules, rng_seed, max_cascade_waves)


# Singleton instance
_resolver = None


def get_cascade_resolver() -> CascadeResolver:
    """Get or create the resolver configured from settings."""
    global _resolver
    if _resolver is None:
        settings = get_settings()
        _resolver = CascadeResolver(
            base_points=settings.base_points,
            max_cascade_waves=settings.max_cascade_waves,
        )
    return _resolver
