"""
JSON output for the extracted weapon data.

Two renderings are produced: a compact one for programs and a pretty one,
one stat per line, for people reading diffs between page versions.
"""

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, Union

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

INDENT = "  "
DOUBLE_INDENT = INDENT + INDENT


def _finite_or_none(value: Any) -> Any:
    # JSON has no NaN or Infinity, write them as null
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _json_value(value: Any) -> str:
    return json.dumps(_finite_or_none(value), ensure_ascii=False)


def to_compact_json(sym_data: Dict[str, Dict[str, Any]]) -> str:
    cleaned = {
        weapon: {attribute: _finite_or_none(value) for attribute, value in stats.items()}
        for weapon, stats in sym_data.items()
    }
    return json.dumps(cleaned, ensure_ascii=False, separators=(",", ":"))


def to_pretty_json(sym_data: Dict[str, Dict[str, Any]]) -> str:
    """
    Render weapons and their stats in insertion order with two-space indentation.

    Example:
        {
          "M16A3": {
            "ammoCapacity": 30,
            "rateOfFire": 800
          }
        }
    """
    if not sym_data:
        return "{}"

    weapon_blocks = []
    for weapon, stats in sym_data.items():
        stat_lines = [f"{DOUBLE_INDENT}{_json_value(attribute)}: {_json_value(value)}" for attribute, value in stats.items()]
        block = f"{INDENT}{_json_value(weapon)}: {{\n"
        if stat_lines:
            block += ",\n".join(stat_lines) + "\n"
        block += f"{INDENT}}}"
        weapon_blocks.append(block)

    return "{\n" + ",\n".join(weapon_blocks) + "\n}"


def persist(filepath: Union[str, Path], content: str) -> bool:
    """
    Write content to a file.

    Returns:
        True if the file was written, False if the write failed (the error is logged)
    """
    try:
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        logger.error(f"Error writing {filepath}: {e}")
        return False
    logger.info(f"Created {filepath}")
    return True
