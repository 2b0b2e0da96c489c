"""2x2 square detection."""
from typing import List, Optional, Sequence, Set

from ..models.grid import NONE, CellState, GridState, Position, Square


def _square_at(
    colors: Sequence[int],
    heights: Sequence[int],
    states: Sequence[CellState],
    width: int,
    x: int,
    y: int,
) -> Optional[Square]:
    """Return the square whose top-left corner is (x, y), if any."""
    i = y * width + x
    color = colors[i]
    if color == NONE:
        return None
    corners = (i, i + 1, i + width, i + width + 1)
    height = heights[i]
    for j in corners:
        if colors[j] != color or heights[j] != height or states[j] != CellState.NORMAL:
            return None
    return Square(x=x, y=y, color=color, height=height)


def scan_raw_squares(grid: GridState) -> List[Square]:
    """
    Collect every 2x2 square in row-major scan order, overlaps included.

    A square needs four cells with the same non-empty color, the same
    height, and NORMAL state.
    """
    colors = grid.colors()
    heights = grid.heights()
    states = grid.states()
    squares: List[Square] = []
    for y in range(grid.height - 1):
        for x in range(grid.width - 1):
            square = _square_at(colors, heights, states, grid.width, x, y)
            if square is not None:
                squares.append(square)
    return squares


def find_squares(grid: GridState) -> List[Square]:
    """
    Find non-overlapping squares.

    Raw squares are filtered greedily in scan order: a square is kept only
    if none of its cells were claimed by an earlier kept square. The result
    is order-dependent and must stay that way for cascades and scores to be
    reproducible.

    Args:
        grid: Grid to scan.

    Returns:
        Accepted squares in scan order.
    """
    claimed: Set[Position] = set()
    accepted: List[Square] = []
    for square in scan_raw_squares(grid):
        cells = square.cells
        if any(pos in claimed for pos in cells):
            continue
        claimed.update(cells)
        accepted.append(square)
    return accepted


def buffer_has_square(
    colors: Sequence[int],
    heights: Sequence[int],
    states: Sequence[CellState],
    width: int,
    height: int,
) -> bool:
    """Return True if flattened cell layers contain at least one square."""
    for y in range(height - 1):
        for x in range(width - 1):
            if _square_at(colors, heights, states, width, x, y) is not None:
                return True
    return False


def has_square(grid: GridState) -> bool:
    """Return True if the grid contains at least one square."""
    return buffer_has_square(
        grid.colors(), grid.heights(), grid.states(), grid.width, grid.height
    )
