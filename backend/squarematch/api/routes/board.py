"""Board mechanics API routes: squares, cascades, and player swaps."""
from fastapi import APIRouter, Depends, HTTPException

from ...models.schemas import (
    ResolveRequest,
    ResolveResponse,
    SquaresRequest,
    SquaresResponse,
    SwapRequest,
    SwapResponse,
)
from ...core.cascade import CascadeResolver
from ...core.matcher import find_squares
from ...utils.helpers import grid_from_json, rules_from_json
from ..deps import get_resolver

router = APIRouter(prefix="/api", tags=["board"])


@router.post("/squares", response_model=SquaresResponse)
async def detect_squares(request: SquaresRequest) -> SquaresResponse:
    """Return the non-overlapping squares in a grid."""
    try:
        grid = grid_from_json(request.grid.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid grid: {str(e)}")

    squares = find_squares(grid)
    return SquaresResponse(squares=[s.to_dict() for s in squares], count=len(squares))


@router.post("/resolve", response_model=ResolveResponse)
async def resolve_cascade(
    request: ResolveRequest,
    resolver: CascadeResolver = Depends(get_resolver),
) -> ResolveResponse:
    """
    Resolve every cascade wave on a grid.

    Args:
        request: ResolveRequest with grid, rules, and seed.
        resolver: CascadeResolver dependency.

    Returns:
        ResolveResponse with the final grid and the event log.
    """
    try:
        grid = grid_from_json(request.grid.model_dump())
        rules = rules_from_json(request.rules.model_dump())
        result = resolver.resolve(grid, rules, request.seed, request.max_cascade_waves)
        return ResolveResponse(**result.to_dict())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Resolve failed: {str(e)}")


@router.post("/swap", response_model=SwapResponse)
async def play_swap(
    request: SwapRequest,
    resolver: CascadeResolver = Depends(get_resolver),
) -> SwapResponse:
    """
    Play one player swap.

    Illegal swaps come back with legal=false and a reason; legal swaps
    carry the cascade they triggered.
    """
    try:
        grid = grid_from_json(request.grid.model_dump())
        rules = rules_from_json(request.rules.model_dump())
        outcome = resolver.play_swap(
            grid,
            tuple(request.move.src),
            tuple(request.move.dst),
            rules,
            request.seed,
        )
        return SwapResponse(**outcome.to_dict())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Swap failed: {str(e)}")
