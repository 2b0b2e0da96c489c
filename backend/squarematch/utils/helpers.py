"""Utility helper functions."""
from typing import Dict, Any, Optional

from ..models.grid import NONE, CellState, GridState
from ..models.level import Rules

_STATE_NAMES = {state.value for state in CellState}


def validate_grid_json(grid_json: Dict[str, Any]) -> tuple[bool, Optional[str]]:
    """
    Validate grid JSON structure.

    Args:
        grid_json: Mapping with a "colors" row list and optional
            "heights"/"states" layers of the same shape.

    Returns:
        Tuple of (is_valid, error_message).
    """
    colors = grid_json.get("colors")
    if not isinstance(colors, list) or not colors:
        return False, "'colors' must be a non-empty list of rows"

    if not isinstance(colors[0], list) or not colors[0]:
        return False, "'colors' rows must be non-empty lists"
    width = len(colors[0])

    for layer_name in ("colors", "heights", "states"):
        layer = grid_json.get(layer_name)
        if layer is None:
            continue
        if not isinstance(layer, list) or len(layer) != len(colors):
            return False, f"'{layer_name}' must have {len(colors)} rows"
        for y, row in enumerate(layer):
            if not isinstance(row, list) or len(row) != width:
                return False, f"'{layer_name}' row {y} must have {width} cells"

    for y, row in enumerate(colors):
        for x, color in enumerate(row):
            if not isinstance(color, int) or color < NONE:
                return False, f"Invalid color at ({x}, {y}): {color!r}"

    heights = grid_json.get("heights")
    if heights is not None:
        for y, row in enumerate(heights):
            for x, height in enumerate(row):
                if not isinstance(height, int) or height < 0:
                    return False, f"Invalid height at ({x}, {y}): {height!r}"

    states = grid_json.get("states")
    if states is not None:
        for y, row in enumerate(states):
            for x, state in enumerate(row):
                if state not in _STATE_NAMES:
                    return False, f"Invalid state at ({x}, {y}): {state!r}"

    return True, None


def grid_from_json(grid_json: Dict[str, Any]) -> GridState:
    """
    Build a GridState from grid JSON.

    Raises:
        ValueError: If the JSON is malformed (GridError subclasses for
            empty or mismatched layers).
    """
    is_valid, error = validate_grid_json(grid_json)
    if not is_valid:
        raise ValueError(error)
    return GridState.from_rows(
        grid_json["colors"],
        heights=grid_json.get("heights"),
        states=grid_json.get("states"),
    )


def rules_from_json(rules_json: Optional[Dict[str, Any]]) -> Rules:
    """Rules from a declarative level configuration; defaults when missing."""
    return Rules.from_level_config(rules_json or {})


def format_grid_for_display(grid: GridState) -> str:
    """
    Format a grid for human-readable display.

    Empty cells print as '.', locked cells get a '*' suffix, and stacked
    cells show their height after a caret.
    """
    lines = [f"Grid {grid.width}x{grid.height}:"]
    for y in range(grid.height):
        row = []
        for x in range(grid.width):
            cell = grid.get(x, y)
            if cell.is_empty:
                row.append(" .  ")
                continue
            text = f"{cell.color:>2}"
            text += f"^{cell.height}" if cell.height > 1 else "  "
            if cell.state == CellState.LOCKED:
                text = text.rstrip() + "*"
            row.append(text.ljust(4))
        lines.append("  " + " ".join(row).rstrip())
    return "\n".join(lines)
