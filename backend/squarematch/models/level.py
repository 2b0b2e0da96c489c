"""Level configuration, rules, and level-authoring result models."""
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional

from .grid import GridState, Move

_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0"}


def _parse_flag(config: Dict[str, Any], key: str) -> bool:
    """Read a mechanic flag; strings like "false" parse as booleans."""
    value = config.get(key, False)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise ValueError(f"'{key}' must be a boolean, got {value!r}")


@dataclass(frozen=True)
class Rules:
    """Mechanic flags that decide which resolution steps a cascade runs."""
    lock_on_match: bool = False
    clear_locked_squares: bool = False
    enable_gravity: bool = False
    refill_from_top: bool = False
    num_colors: int = 4
    cascade_score_multiplier: float = 1.0

    def __post_init__(self):
        if self.num_colors < 1:
            raise ValueError(f"num_colors must be at least 1, got {self.num_colors}")

    @property
    def is_static(self) -> bool:
        """True when matches neither lock nor clear, so nothing cascades."""
        return not self.lock_on_match and not self.clear_locked_squares

    @classmethod
    def from_level_config(cls, config: Dict[str, Any]) -> "Rules":
        """
        Derive rules from a declarative level configuration.

        Unknown keys are ignored; missing mechanic flags default to off.
        Flags accept booleans or "true"/"false" strings.

        Raises:
            ValueError: If a flag has any other value.
        """
        return cls(
            lock_on_match=_parse_flag(config, "lock_on_match"),
            clear_locked_squares=_parse_flag(config, "clear_locked_squares"),
            enable_gravity=_parse_flag(config, "enable_gravity"),
            refill_from_top=_parse_flag(config, "refill_from_top"),
            num_colors=int(config.get("num_colors", 4)),
            cascade_score_multiplier=float(config.get("cascade_score_multiplier", 1.0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "lock_on_match": self.lock_on_match,
            "clear_locked_squares": self.clear_locked_squares,
            "enable_gravity": self.enable_gravity,
            "refill_from_top": self.refill_from_top,
            "num_colors": self.num_colors,
            "cascade_score_multiplier": self.cascade_score_multiplier,
        }


@dataclass
class LevelValidation:
    """Outcome of validating a level's starting grid."""
    valid: bool
    solvable: bool
    has_starting_match: bool
    shortest_solution: List[Move] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    states_explored: int = 0

    @property
    def solution_length(self) -> Optional[int]:
        if not self.solvable:
            return None
        return len(self.shortest_solution)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "valid": self.valid,
            "solvable": self.solvable,
            "has_starting_match": self.has_starting_match,
            "shortest_solution": [m.to_dict() for m in self.shortest_solution],
            "solution_length": self.solution_length,
            "errors": self.errors,
            "states_explored": self.states_explored,
        }


@dataclass
class GenerationResult:
    """Result of reverse-solve puzzle generation."""
    success: bool
    grid: Optional[GridState] = None
    solution: List[Move] = field(default_factory=list)
    attempts: int = 0
    failure_reason: str = ""
    validation: Optional[LevelValidation] = None
    fallback: bool = False
    generation_time_ms: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "success": self.success,
            "grid": self.grid.to_dict() if self.grid is not None else None,
            "solution": [m.to_dict() for m in self.solution],
            "attempts": self.attempts,
            "failure_reason": self.failure_reason,
            "validation": self.validation.to_dict() if self.validation else None,
            "fallback": self.fallback,
            "generation_time_ms": self.generation_time_ms,
        }
