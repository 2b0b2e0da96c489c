"""Core engine package.

This package contains the square matcher, cascade resolver, solvability
search, level validator, and puzzle generator.
"""
from .matcher import find_squares, has_square
from .cascade import CascadeResolver, resolve, get_cascade_resolver
from .solver import SolvabilitySolver, solve, get_solver
from .validator import LevelValidator, validate_level, get_validator
from .generator import (
    PuzzleGenerator,
    generate,
    build_goal,
    build_random_grid,
    get_generator,
)
from .level_cache import LevelCache

__all__ = [
    "find_squares",
    "has_square",
    "CascadeResolver",
    "resolve",
    "get_cascade_resolver",
    "SolvabilitySolver",
    "solve",
    "get_solver",
    "LevelValidator",
    "validate_level",
    "get_validator",
    "PuzzleGenerator",
    "generate",
    "build_goal",
    "build_random_grid",
    "get_generator",
    "LevelCache",
]
