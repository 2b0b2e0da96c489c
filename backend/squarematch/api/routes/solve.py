"""Solvability search and level validation API routes."""
from fastapi import APIRouter, Depends, HTTPException

from ...models.schemas import (
    SolveRequest,
    SolveResponse,
    ValidateRequest,
    ValidateResponse,
)
from ...core.solver import SolvabilitySolver
from ...core.validator import LevelValidator
from ...utils.helpers import grid_from_json, rules_from_json
from ..deps import get_level_solver, get_level_validator

router = APIRouter(prefix="/api", tags=["solve"])


@router.post("/solve", response_model=SolveResponse)
async def solve_grid(
    request: SolveRequest,
    solver: SolvabilitySolver = Depends(get_level_solver),
) -> SolveResponse:
    """
    Find the shortest swap sequence that creates a square.

    Args:
        request: SolveRequest with grid and budgets.
        solver: SolvabilitySolver dependency.

    Returns:
        SolveResponse; solvable=false with exhausted=true means the state
        budget ran out.
    """
    try:
        grid = grid_from_json(request.grid.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid grid: {str(e)}")

    result = solver.solve(grid, request.max_moves, request.max_states_explored)
    return SolveResponse(**result.to_dict())


@router.post("/validate", response_model=ValidateResponse)
async def validate_grid(
    request: ValidateRequest,
    validator: LevelValidator = Depends(get_level_validator),
) -> ValidateResponse:
    """Validate a level's starting grid against its move limit."""
    try:
        grid = grid_from_json(request.grid.model_dump())
        rules = rules_from_json(request.rules.model_dump()) if request.rules else None
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid level: {str(e)}")

    validation = validator.validate(
        grid,
        move_limit=request.move_limit,
        rules=rules,
        min_solution_depth=request.min_solution_depth,
    )
    return ValidateResponse(**validation.to_dict())
