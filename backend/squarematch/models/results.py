"""Result models returned by the cascade resolver and the solver."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Any, Optional, Tuple, Union

from .grid import GridState, Move, Position, Square


class EventType(str, Enum):
    """Kinds of cascade events, in the order a wave emits them."""
    MATCH = "match"
    RESOLVE = "resolve"
    GRAVITY = "gravity"
    REFILL = "refill"


class ResolveAction(str, Enum):
    """What happened to a matched cell."""
    LOCK = "lock"
    DECREMENT = "decrement"
    CLEAR = "clear"
    RESET = "reset"


@dataclass(frozen=True)
class MatchEvent:
    """Squares found at the start of a wave and the score they earned."""
    wave: int
    squares: Tuple[Square, ...]
    score: float
    type: EventType = EventType.MATCH

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "wave": self.wave,
            "squares": [s.to_dict() for s in self.squares],
            "score": self.score,
        }


@dataclass(frozen=True)
class ResolveEvent:
    """Per-cell outcome of resolving the wave's squares."""
    wave: int
    cells: Tuple[Tuple[Position, ResolveAction], ...]
    type: EventType = EventType.RESOLVE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "wave": self.wave,
            "cells": [
                {"position": list(pos), "action": action.value}
                for pos, action in self.cells
            ],
        }


@dataclass(frozen=True)
class TileMove:
    """A tile that fell from one row to another."""
    src: Position
    dst: Position

    def to_dict(self) -> Dict[str, Any]:
        return {"from": list(self.src), "to": list(self.dst)}


@dataclass(frozen=True)
class GravityEvent:
    wave: int
    moves: Tuple[TileMove, ...]
    type: EventType = EventType.GRAVITY

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "wave": self.wave,
            "moves": [m.to_dict() for m in self.moves],
        }


@dataclass(frozen=True)
class RefillEvent:
    """New tiles spawned into empty cells, as (position, color) pairs."""
    wave: int
    tiles: Tuple[Tuple[Position, int], ...]
    type: EventType = EventType.REFILL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "wave": self.wave,
            "tiles": [{"position": list(pos), "color": color} for pos, color in self.tiles],
        }


CascadeEvent = Union[MatchEvent, ResolveEvent, GravityEvent, RefillEvent]


@dataclass(frozen=True)
class ResolveResult:
    """
    Complete outcome of one cascade resolution.

    Attributes:
        final_state: Grid after the last wave.
        squares_created: Squares matched across every wave.
        cascade_depth: Number of waves that matched at least one square.
        total_score: Sum of per-wave scores.
        stable: False when the wave ceiling was hit with squares remaining.
        events: Ordered event log for the presentation layer.
    """
    final_state: GridState
    squares_created: int
    cascade_depth: int
    total_score: float
    stable: bool
    events: Tuple[CascadeEvent, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "final_state": self.final_state.to_dict(),
            "squares_created": self.squares_created,
            "cascade_depth": self.cascade_depth,
            "total_score": self.total_score,
            "stable": self.stable,
            "events": [e.to_dict() for e in self.events],
        }


@dataclass(frozen=True)
class SwapOutcome:
    """Result of a player swap: legality plus the cascade it triggered."""
    legal: bool
    reason: str = ""
    result: Optional[ResolveResult] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "legal": self.legal,
            "reason": self.reason,
            "result": self.result.to_dict() if self.result else None,
        }


@dataclass
class SolveResult:
    """
    Result of a solvability search.

    Attributes:
        solvable: A match is reachable within the move budget.
        solution_length: Length of the shortest solution, None if unsolvable.
        moves: Shortest solution in forward order.
        states_explored: Distinct states visited, including the start.
        exhausted: The state budget ran out before the search concluded.
        computation_time_ms: Wall time spent searching.
    """
    solvable: bool
    solution_length: Optional[int] = None
    moves: List[Move] = field(default_factory=list)
    states_explored: int = 0
    exhausted: bool = False
    computation_time_ms: float = 0.0

    @property
    def is_trivial(self) -> bool:
        """Solvable in at most one move."""
        return self.solvable and self.solution_length is not None and self.solution_length <= 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "solvable": self.solvable,
            "solution_length": self.solution_length,
            "moves": [m.to_dict() for m in self.moves],
            "states_explored": self.states_explored,
            "is_trivial": self.is_trivial,
            "exhausted": self.exhausted,
            "computation_time_ms": round(self.computation_time_ms, 2),
        }
