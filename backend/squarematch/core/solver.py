"""Breadth-first solvability search over uncascaded swaps."""
import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Deque, Hashable, List, Optional, Sequence, Set, Tuple

from ..config import get_settings
from ..models.grid import CellState, GridState, Move
from ..models.results import SolveResult
from .matcher import buffer_has_square

logger = logging.getLogger(__name__)

HASH_MULTIPLIER = 31
HASH_MODULUS = 1_000_000_007


def state_hash(colors: Sequence[int]) -> int:
    """Polynomial rolling hash of a color buffer in scan order."""
    value = 0
    for color in colors:
        value = (value * HASH_MULTIPLIER + color) % HASH_MODULUS
    return value


@dataclass
class SearchNode:
    """
    One explored board in the search tree.

    Attributes:
        colors: Flattened row-major color buffer.
        move_count: Swaps applied since the start grid.
        last_move: Swap that produced this node, None at the root.
        parent: Node this one was expanded from.
    """
    colors: Tuple[int, ...]
    move_count: int = 0
    last_move: Optional[Move] = None
    parent: Optional["SearchNode"] = None

    def path(self) -> List[Move]:
        """Walk parent links back to the root; moves in forward order."""
        moves: List[Move] = []
        node: Optional[SearchNode] = self
        while node is not None and node.last_move is not None:
            moves.append(node.last_move)
            node = node.parent
        moves.reverse()
        return moves


class SolvabilitySolver:
    """
    Finds the shortest sequence of swaps that produces a square.

    Gravity and refill are not modelled: every swap on the path must stand
    on its own, which matches the player-facing rule that a swap has to
    create a match before any mechanic fires.

    Only right and down swaps are generated from each cell. Every adjacency
    is still covered exactly once, from its lower-index cell.

    States are deduplicated by a coarse polynomial hash of the color buffer.
    A collision makes the search treat a new state as already seen. Set
    exact_keys to key on the full buffer instead.
    """

    MAX_STATES_EXPLORED = 10000

    def __init__(self, max_states_explored: int = MAX_STATES_EXPLORED, exact_keys: bool = False):
        self.max_states_explored = max_states_explored
        self.exact_keys = exact_keys

    def solve(
        self,
        start_grid: GridState,
        max_moves: int,
        max_states_explored: Optional[int] = None,
    ) -> SolveResult:
        """
        Search for the shortest solution within max_moves swaps.

        Args:
            start_grid: Grid to solve; not modified.
            max_moves: Deepest path length explored.
            max_states_explored: State budget; defaults to the solver's.

        Returns:
            SolveResult. A start grid that already holds a square is
            solvable with length 0.
        """
        budget = self.max_states_explored if max_states_explored is None else max_states_explored
        start_time = time.perf_counter()

        width = start_grid.width
        height = start_grid.height
        # Swaps move colors only, so these layers are fixed for the whole search
        heights = start_grid.heights()
        states = start_grid.states()

        def has_match(colors: Sequence[int]) -> bool:
            return buffer_has_square(colors, heights, states, width, height)

        def finish(solvable: bool, node: Optional[SearchNode], explored: int, exhausted: bool = False) -> SolveResult:
            moves = node.path() if node is not None else []
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            return SolveResult(
                solvable=solvable,
                solution_length=len(moves) if solvable else None,
                moves=moves,
                states_explored=explored,
                exhausted=exhausted,
                computation_time_ms=elapsed_ms,
            )

        root = SearchNode(colors=tuple(start_grid.colors()))
        if has_match(root.colors):
            return finish(True, root, 1)

        playable = [
            not cell.is_empty and cell.state == CellState.NORMAL
            for cell in start_grid.cells
        ]
        swaps = self._adjacent_swaps(width, height, playable)
        visited: Set[Hashable] = {self._key(root.colors)}
        queue: Deque[SearchNode] = deque([root])
        explored = 1

        while queue:
            node = queue.popleft()
            if node.move_count >= max_moves:
                continue

            for i, j, move in swaps:
                colors = node.colors
                if colors[i] == colors[j]:
                    continue
                buffer = list(colors)
                buffer[i], buffer[j] = buffer[j], buffer[i]
                child_colors = tuple(buffer)

                key = self._key(child_colors)
                if key in visited:
                    continue
                visited.add(key)
                explored += 1

                child = SearchNode(
                    colors=child_colors,
                    move_count=node.move_count + 1,
                    last_move=move,
                    parent=node,
                )
                if has_match(child_colors):
                    logger.debug(
                        f"Solved in {child.move_count} moves after {explored} states"
                    )
                    return finish(True, child, explored)

                if explored >= budget:
                    logger.debug(f"State budget of {budget} exhausted")
                    return finish(False, None, explored, exhausted=True)

                queue.append(child)

        return finish(False, None, explored)

    def _key(self, colors: Tuple[int, ...]) -> Hashable:
        if self.exact_keys:
            return colors
        return state_hash(colors)

    @staticmethod
    def _adjacent_swaps(
        width: int, height: int, playable: Sequence[bool]
    ) -> List[Tuple[int, int, Move]]:
        """Right and down swaps between playable cells, in scan order."""
        swaps: List[Tuple[int, int, Move]] = []
        for y in range(height):
            for x in range(width):
                i = y * width + x
                if not playable[i]:
                    continue
                if x + 1 < width and playable[i + 1]:
                    swaps.append((i, i + 1, Move(src=(x, y), dst=(x + 1, y))))
                if y + 1 < height and playable[i + width]:
                    swaps.append((i, i + width, Move(src=(x, y), dst=(x, y + 1))))
        return swaps


def solve(
    start_grid: GridState,
    max_moves: int,
    max_states_explored: int = SolvabilitySolver.MAX_STATES_EXPLORED,
    exact_keys: bool = False,
) -> SolveResult:
    """Solve with a one-off solver."""
    return SolvabilitySolver(max_states_explored, exact_keys).solve(start_grid, max_moves)


# Singleton instance
_solver = None


def get_solver() -> SolvabilitySolver:
    """Get or create the solver configured from settings."""
    global _solver
    if _solver is None:
        settings = get_settings()
        _solver = SolvabilitySolver(
            max_states_explored=settings.max_states_explored,
            exact_keys=settings.exact_state_keys,
        )
    return _solver
