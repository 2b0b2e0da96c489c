"""Puzzle generation API routes."""
import random

from fastapi import APIRouter, Depends, HTTPException

from ...models.schemas import (
    GenerateRequest,
    GenerateResponse,
    RandomPuzzleRequest,
)
from ...models.grid import Move
from ...models.level import GenerationResult
from ...core.generator import PuzzleGenerator
from ...core.level_cache import LevelCache
from ...utils.helpers import grid_from_json
from ..deps import get_level_cache, get_level_generator

router = APIRouter(prefix="/api", tags=["generate"])


@router.post("/generate", response_model=GenerateResponse)
async def generate_from_goal(
    request: GenerateRequest,
    generator: PuzzleGenerator = Depends(get_level_generator),
) -> GenerateResponse:
    """
    Reverse-solve a starting grid from a goal grid and its solution.

    Args:
        request: GenerateRequest with the goal grid and forward solution.
        generator: PuzzleGenerator dependency.

    Returns:
        GenerateResponse; success=false with a failure_reason when no
        valid grid was found within the attempt budget.
    """
    try:
        goal = grid_from_json(request.goal.model_dump())
        moves = [Move(src=tuple(m.src), dst=tuple(m.dst)) for m in request.solution]
        result = generator.generate(
            goal,
            moves,
            request.num_colors,
            max_attempts=request.max_attempts,
            rng=random.Random(request.seed),
        )
        return GenerateResponse(**result.to_dict())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Generation failed: {str(e)}")


@router.post("/generate/random", response_model=GenerateResponse)
async def generate_random_puzzle(
    request: RandomPuzzleRequest,
    generator: PuzzleGenerator = Depends(get_level_generator),
    cache: LevelCache[GenerationResult] = Depends(get_level_cache),
) -> GenerateResponse:
    """
    Generate a puzzle from scratch.

    With a level_id the result is cached and a repeated request returns
    the cached level instead of generating a new one.
    """
    def build() -> GenerationResult:
        return generator.generate_puzzle(
            request.width,
            request.height,
            request.num_colors,
            request.depth,
            rng=random.Random(request.seed),
            max_attempts=request.max_attempts,
        )

    try:
        if request.level_id is None:
            result = build()
        else:
            result = cache.get_or_create(request.level_id, build)
        return GenerateResponse(**result.to_dict())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Generation failed: {str(e)}")
