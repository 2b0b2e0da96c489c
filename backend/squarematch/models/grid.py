"""Grid state model: cells, squares, and the grid error taxonomy."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple

# Sentinel color for an empty cell
NONE = -1

Position = Tuple[int, int]  # (x, y)


class GridError(ValueError):
    """Base class for malformed grid access or construction."""


class OutOfBounds(GridError):
    """Raised when a coordinate falls outside the grid."""

    def __init__(self, x: int, y: int, width: int, height: int):
        self.x = x
        self.y = y
        super().__init__(
            f"Position ({x}, {y}) is outside the {width}x{height} grid"
        )


class EmptyGrid(GridError):
    """Raised when a grid would have no cells."""


class DimensionMismatch(GridError):
    """Raised when supplied layers or grids disagree on their shape."""


class CellState(str, Enum):
    """Lifecycle state of a cell."""
    NORMAL = "normal"
    LOCKED = "locked"
    CLEARING = "clearing"


@dataclass
class Cell:
    """A single grid cell."""
    color: int = NONE
    height: int = 0
    state: CellState = CellState.NORMAL

    @property
    def is_empty(self) -> bool:
        return self.color == NONE

    def clear(self) -> None:
        """Reset to the empty cell."""
        self.color = NONE
        self.height = 0
        self.state = CellState.NORMAL

    def copy(self) -> "Cell":
        return Cell(color=self.color, height=self.height, state=self.state)

    def to_dict(self) -> dict:
        return {"color": self.color, "height": self.height, "state": self.state.value}


@dataclass(frozen=True)
class Square:
    """A detected 2x2 match, identified by its top-left corner."""
    x: int
    y: int
    color: int
    height: int

    @property
    def cells(self) -> Tuple[Position, ...]:
        """The four covered positions in scan order."""
        return (
            (self.x, self.y),
            (self.x + 1, self.y),
            (self.x, self.y + 1),
            (self.x + 1, self.y + 1),
        )

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "color": self.color, "height": self.height}


def is_adjacent(a: Position, b: Position) -> bool:
    """Return True if two positions are orthogonal neighbours."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


@dataclass(frozen=True)
class Move:
    """A swap between two cells, written from -> to."""
    src: Position
    dst: Position

    @classmethod
    def from_dict(cls, data: dict) -> "Move":
        src = data["from"]
        dst = data["to"]
        return cls(src=(int(src[0]), int(src[1])), dst=(int(dst[0]), int(dst[1])))

    @property
    def is_adjacent(self) -> bool:
        return is_adjacent(self.src, self.dst)

    def to_dict(self) -> dict:
        return {"from": list(self.src), "to": list(self.dst)}


@dataclass
class GridState:
    """
    Rectangular grid of cells, stored row-major.

    A GridState is owned by one component at a time. Speculative work
    (search expansion, noise trials, cascade resolution) operates on a
    deep_copy() so the caller's grid never changes underneath it.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        cells: Row-major list of width * height cells.
    """
    width: int
    height: int
    cells: List[Cell] = field(default_factory=list)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise EmptyGrid(f"Grid dimensions must be positive, got {self.width}x{self.height}")
        if not self.cells:
            self.cells = [Cell() for _ in range(self.width * self.height)]
        elif len(self.cells) != self.width * self.height:
            raise DimensionMismatch(
                f"Expected {self.width * self.height} cells for a "
                f"{self.width}x{self.height} grid, got {len(self.cells)}"
            )

    @classmethod
    def create(cls, width: int, height: int) -> "GridState":
        """Create an all-empty grid."""
        return cls(width=width, height=height)

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[int]],
        heights: Optional[Sequence[Sequence[int]]] = None,
        states: Optional[Sequence[Sequence[CellState]]] = None,
    ) -> "GridState":
        """
        Build a grid from a 2D color list indexed rows[y][x].

        Args:
            rows: Colors per row; NONE (-1) marks an empty cell.
            heights: Optional stack heights with the same shape. Colored
                cells default to height 1.
            states: Optional cell states with the same shape.

        Returns:
            New GridState.

        Raises:
            EmptyGrid: If there are no rows or the first row is empty.
            DimensionMismatch: If rows are ragged or a layer has another shape.
        """
        if not rows or not rows[0]:
            raise EmptyGrid("Grid must have at least one row and one column")

        height = len(rows)
        width = len(rows[0])
        for layer_name, layer in (("colors", rows), ("heights", heights), ("states", states)):
            if layer is None:
                continue
            if len(layer) != height or any(len(row) != width for row in layer):
                raise DimensionMismatch(
                    f"'{layer_name}' layer does not match the {width}x{height} grid"
                )

        cells: List[Cell] = []
        for y in range(height):
            for x in range(width):
                color = int(rows[y][x])
                if color == NONE:
                    cells.append(Cell())
                    continue
                cell_height = int(heights[y][x]) if heights is not None else 1
                state = CellState(states[y][x]) if states is not None else CellState.NORMAL
                cells.append(Cell(color=color, height=cell_height, state=state))

        return cls(width=width, height=height, cells=cells)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _index(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise OutOfBounds(x, y, self.width, self.height)
        return y * self.width + x

    def get(self, x: int, y: int) -> Cell:
        """Return the cell at (x, y)."""
        return self.cells[self._index(x, y)]

    def set(
        self,
        x: int,
        y: int,
        color: int,
        height: int = 1,
        state: CellState = CellState.NORMAL,
    ) -> None:
        """Overwrite the cell at (x, y). Setting NONE empties the cell."""
        cell = self.cells[self._index(x, y)]
        if color == NONE:
            cell.clear()
            return
        cell.color = color
        cell.height = height
        cell.state = state

    def swap(self, a: Position, b: Position) -> None:
        """
        Exchange the colors of two cells in place.

        Height and state belong to the cell and stay put, so applying the
        same swap twice restores the grid exactly.
        """
        first = self.cells[self._index(*a)]
        second = self.cells[self._index(*b)]
        first.color, second.color = second.color, first.color

    def deep_copy(self) -> "GridState":
        """Return a fully independent copy."""
        return GridState(
            width=self.width,
            height=self.height,
            cells=[cell.copy() for cell in self.cells],
        )

    def positions(self) -> Iterator[Position]:
        """Yield every position in row-major scan order."""
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)

    def colors(self) -> List[int]:
        """Flattened row-major color buffer."""
        return [cell.color for cell in self.cells]

    def heights(self) -> List[int]:
        return [cell.height for cell in self.cells]

    def states(self) -> List[CellState]:
        return [cell.state for cell in self.cells]

    def to_rows(self) -> List[List[int]]:
        """Convert colors back to a rows[y][x] list."""
        return [
            [self.cells[y * self.width + x].color for x in range(self.width)]
            for y in range(self.height)
        ]

    def to_dict(self) -> dict:
        """Serialize all three cell layers."""
        return {
            "width": self.width,
            "height": self.height,
            "colors": self.to_rows(),
            "heights": [
                [self.cells[y * self.width + x].height for x in range(self.width)]
                for y in range(self.height)
            ],
            "states": [
                [self.cells[y * self.width + x].state.value for x in range(self.width)]
                for y in range(self.height)
            ],
        }
