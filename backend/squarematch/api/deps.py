"""API dependencies."""
from ..core.cascade import get_cascade_resolver, CascadeResolver
from ..core.solver import get_solver, SolvabilitySolver
from ..core.validator import get_validator, LevelValidator
from ..core.generator import get_generator, PuzzleGenerator
from ..core.level_cache import LevelCache
from ..models.level import GenerationResult

# Levels generated through the API, owned by the API layer
_level_cache: LevelCache[GenerationResult] = LevelCache()


def get_resolver() -> CascadeResolver:
    """Dependency for cascade resolver."""
    return get_cascade_resolver()


def get_level_solver() -> SolvabilitySolver:
    """Dependency for solvability solver."""
    return get_solver()


def get_level_validator() -> LevelValidator:
    """Dependency for level validator."""
    return get_validator()


def get_level_generator() -> PuzzleGenerator:
    """Dependency for puzzle generator."""
    return get_generator()


def get_level_cache() -> LevelCache[GenerationResult]:
    """Dependency for the generated-level cache."""
    return _level_cache
