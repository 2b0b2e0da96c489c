"""Pydantic schemas for API request/response validation."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Any, Optional, Tuple


class GridPayload(BaseModel):
    """A grid as row lists indexed [y][x]."""
    colors: List[List[int]] = Field(..., description="Cell colors; -1 marks an empty cell")
    heights: Optional[List[List[int]]] = Field(default=None, description="Stack heights (default 1)")
    states: Optional[List[List[str]]] = Field(
        default=None, description="Cell states (normal/locked/clearing)"
    )


class RulesPayload(BaseModel):
    """Mechanic flags for cascade resolution."""
    lock_on_match: bool = Field(default=False, description="Matched cells lock")
    clear_locked_squares: bool = Field(default=False, description="Matched cells shrink or clear")
    enable_gravity: bool = Field(default=False, description="Tiles fall into empty cells")
    refill_from_top: bool = Field(default=False, description="Empty cells receive new tiles")
    num_colors: int = Field(default=4, ge=1, le=32, description="Palette size")
    cascade_score_multiplier: float = Field(default=1.0, ge=0, description="Per-wave score multiplier")


class MovePayload(BaseModel):
    """A swap between two cells given as (x, y); accepts from/to like returned moves."""
    model_config = ConfigDict(populate_by_name=True)

    src: Tuple[int, int] = Field(..., alias="from", description="First cell (x, y)")
    dst: Tuple[int, int] = Field(..., alias="to", description="Second cell (x, y)")


class SquaresRequest(BaseModel):
    """Request schema for square detection."""
    grid: GridPayload


class SquaresResponse(BaseModel):
    """Response schema for square detection."""
    squares: List[Dict[str, int]] = Field(default=[], description="Non-overlapping squares")
    count: int = Field(default=0, description="Number of squares")


class ResolveRequest(BaseModel):
    """Request schema for cascade resolution."""
    grid: GridPayload
    rules: RulesPayload = Field(default_factory=RulesPayload)
    seed: Optional[int] = Field(default=None, description="RNG seed for refills")
    max_cascade_waves: Optional[int] = Field(default=None, ge=1, le=100, description="Wave ceiling")


class ResolveResponse(BaseModel):
    """Response schema for cascade resolution."""
    final_state: Dict[str, Any] = Field(..., description="Grid after the last wave")
    squares_created: int = Field(..., description="Squares matched across all waves")
    cascade_depth: int = Field(..., description="Waves that matched at least one square")
    total_score: float = Field(..., description="Accumulated score")
    stable: bool = Field(..., description="False if the wave ceiling was hit")
    events: List[Dict[str, Any]] = Field(default=[], description="Ordered cascade events")


class SwapRequest(BaseModel):
    """Request schema for a player swap."""
    grid: GridPayload
    move: MovePayload
    rules: RulesPayload = Field(default_factory=RulesPayload)
    seed: Optional[int] = Field(default=None, description="RNG seed for refills")


class SwapResponse(BaseModel):
    """Response schema for a player swap."""
    legal: bool = Field(..., description="Whether the swap created a square")
    reason: str = Field(default="", description="Why an illegal swap was rejected")
    result: Optional[ResolveResponse] = Field(default=None, description="Cascade outcome")


class SolveRequest(BaseModel):
    """Request schema for solvability search."""
    grid: GridPayload
    max_moves: int = Field(default=3, ge=0, le=12, description="Move budget")
    max_states_explored: Optional[int] = Field(
        default=None, ge=1, le=1_000_000, description="State budget"
    )


class SolveResponse(BaseModel):
    """Response schema for solvability search."""
    solvable: bool
    solution_length: Optional[int] = None
    moves: List[Dict[str, List[int]]] = Field(default=[], description="Shortest solution")
    states_explored: int = 0
    is_trivial: bool = False
    exhausted: bool = False
    computation_time_ms: float = 0.0


class ValidateRequest(BaseModel):
    """Request schema for level validation."""
    grid: GridPayload
    move_limit: int = Field(default=3, ge=0, le=12, description="Moves the player is given")
    rules: Optional[RulesPayload] = Field(default=None, description="Level rules")
    min_solution_depth: int = Field(default=2, ge=0, description="Shortest acceptable solution")


class ValidateResponse(BaseModel):
    """Response schema for level validation."""
    valid: bool
    solvable: bool
    has_starting_match: bool
    shortest_solution: List[Dict[str, List[int]]] = Field(default=[])
    solution_length: Optional[int] = None
    errors: List[str] = Field(default=[])
    states_explored: int = 0


class GenerateRequest(BaseModel):
    """Request schema for reverse-solve generation from a goal grid."""
    goal: GridPayload
    solution: List[MovePayload] = Field(..., min_length=1, description="Forward solution moves")
    num_colors: int = Field(default=4, ge=2, le=32, description="Palette size for noise")
    max_attempts: Optional[int] = Field(default=None, ge=1, le=500, description="Retry budget")
    seed: Optional[int] = Field(default=None, description="RNG seed for noise")


class RandomPuzzleRequest(BaseModel):
    """Request schema for procedural puzzle generation."""
    width: int = Field(default=6, ge=2, le=12, description="Grid columns")
    height: int = Field(default=6, ge=2, le=12, description="Grid rows")
    num_colors: int = Field(default=4, ge=2, le=32, description="Palette size")
    depth: int = Field(default=2, ge=1, le=6, description="Solution length")
    max_attempts: Optional[int] = Field(default=None, ge=1, le=500, description="Retry budget")
    seed: Optional[int] = Field(default=None, description="RNG seed")
    level_id: Optional[str] = Field(default=None, description="Cache the result under this id")


class GenerateResponse(BaseModel):
    """Response schema for generation."""
    success: bool
    grid: Optional[Dict[str, Any]] = None
    solution: List[Dict[str, List[int]]] = Field(default=[])
    attempts: int = 0
    failure_reason: str = ""
    validation: Optional[Dict[str, Any]] = None
    fallback: bool = False
    generation_time_ms: int = 0
