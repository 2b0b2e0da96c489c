"""Cached level API routes."""
from fastapi import APIRouter, Depends, HTTPException

from ...models.schemas import GenerateResponse
from ...models.level import GenerationResult
from ...core.level_cache import LevelCache
from ..deps import get_level_cache

router = APIRouter(prefix="/api/levels", tags=["levels"])


@router.get("")
async def list_levels(cache: LevelCache[GenerationResult] = Depends(get_level_cache)):
    """List cached level ids."""
    return {"levels": list(cache), "count": len(cache)}


@router.get("/{level_id}", response_model=GenerateResponse)
async def get_level(
    level_id: str,
    cache: LevelCache[GenerationResult] = Depends(get_level_cache),
) -> GenerateResponse:
    """Return a cached level."""
    result = cache.get(level_id)
    if result is None:
        raise HTTPException(status_code=404, detail=f"Level '{level_id}' not found")
    return GenerateResponse(**result.to_dict())


@router.delete("/{level_id}")
async def invalidate_level(
    level_id: str,
    cache: LevelCache[GenerationResult] = Depends(get_level_cache),
):
    """Drop one cached level."""
    if not cache.invalidate(level_id):
        raise HTTPException(status_code=404, detail=f"Level '{level_id}' not found")
    return {"level_id": level_id, "invalidated": True}


@router.delete("")
async def clear_levels(cache: LevelCache[GenerationResult] = Depends(get_level_cache)):
    """Drop every cached level."""
    count = len(cache)
    cache.clear()
    return {"cleared": count}
