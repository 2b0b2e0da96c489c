"""Data models package.

This package contains the grid model, level rules, engine results, and API
schemas for the application.
"""
from .grid import (
    NONE,
    Cell,
    CellState,
    GridState,
    Move,
    Square,
    GridError,
    OutOfBounds,
    EmptyGrid,
    DimensionMismatch,
    is_adjacent,
)
from .level import (
    Rules,
    LevelValidation,
    GenerationResult,
)
from .results import (
    EventType,
    ResolveAction,
    MatchEvent,
    ResolveEvent,
    GravityEvent,
    RefillEvent,
    TileMove,
    ResolveResult,
    SwapOutcome,
    SolveResult,
)

__all__ = [
    # Grid
    "NONE",
    "Cell",
    "CellState",
    "GridState",
    "Move",
    "Square",
    "GridError",
    "OutOfBounds",
    "EmptyGrid",
    "DimensionMismatch",
    "is_adjacent",
    # Level models
    "Rules",
    "LevelValidation",
    "GenerationResult",
    # Engine results
    "EventType",
    "ResolveAction",
    "MatchEvent",
    "ResolveEvent",
    "GravityEvent",
    "RefillEvent",
    "TileMove",
    "ResolveResult",
    "SwapOutcome",
    "SolveResult",
]
