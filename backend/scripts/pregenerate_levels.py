#!/usr/bin/env python3
"""
Pregenerate a range of puzzle levels along a difficulty curve.

Each level is generated from scratch, validated, and written to one JSON
file. Levels that cannot be generated fall back to a match-free random
grid and are flagged in the output.
"""
import argparse
import json
import logging
import random
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

# Add squarematch to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from squarematch.core.generator import get_generator

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(message)s',
    datefmt='%H:%M:%S'
)
logger = logging.getLogger(__name__)

# Difficulty curve: (first level, grid size, colors, solution depth)
DIFFICULTY_CURVE = [
    (1, 4, 3, 1),
    (11, 5, 3, 2),
    (31, 5, 4, 2),
    (61, 6, 4, 3),
    (101, 7, 5, 3),
]


def level_config(level_number: int) -> Dict[str, int]:
    """Look up the curve step that applies to a level."""
    size, colors, depth = DIFFICULTY_CURVE[0][1:]
    for first_level, step_size, step_colors, step_depth in DIFFICULTY_CURVE:
        if level_number >= first_level:
            size, colors, depth = step_size, step_colors, step_depth
    return {"width": size, "height": size, "num_colors": colors, "depth": depth}


def generate_level(level_number: int, seed: int) -> Dict[str, Any]:
    """Generate one level; the seed is derived from the level number."""
    config = level_config(level_number)
    rng = random.Random(seed * 100_003 + level_number)
    result = get_generator().generate_puzzle(
        config["width"],
        config["height"],
        config["num_colors"],
        config["depth"],
        rng=rng,
    )
    return {"level": level_number, "config": config, **result.to_dict()}


def main():
    parser = argparse.ArgumentParser(description="Pregenerate square-match levels")
    parser.add_argument("--start", "-s", type=int, default=1,
                        help="First level number (default: 1)")
    parser.add_argument("--count", "-n", type=int, default=50,
                        help="Number of levels to generate (default: 50)")
    parser.add_argument("--seed", type=int, default=0,
                        help="Base seed for reproducible sets (default: 0)")
    parser.add_argument("--output", "-o", type=str, default=None,
                        help="Output file (JSON)")
    args = parser.parse_args()

    levels: List[Dict[str, Any]] = []
    fallbacks = 0
    failures = 0
    start_time = time.time()

    for level_number in range(args.start, args.start + args.count):
        try:
            level = generate_level(level_number, args.seed)
        except ValueError as e:
            failures += 1
            logger.error(f"Level {level_number} failed: {e}")
            continue

        if level["fallback"]:
            fallbacks += 1
            logger.warning(f"Level {level_number} fell back to a random grid: {level['failure_reason']}")
        else:
            logger.info(
                f"Level {level_number} done ({level['config']['width']}x{level['config']['height']}, "
                f"depth {len(level['solution'])}, {level['attempts']} attempts)"
            )
        levels.append(level)

    elapsed = time.time() - start_time
    logger.info(
        f"Generated {len(levels)} levels in {elapsed:.1f}s "
        f"({fallbacks} fallbacks, {failures} failures)"
    )

    if args.output:
        output_path = Path(args.output)
    else:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = Path(__file__).parent / f"levels_{timestamp}.json"

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump({"seed": args.seed, "levels": levels}, f, indent=2)
    logger.info(f"Saved to: {output_path}")


if __name__ == "__main__":
    main()
