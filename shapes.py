# shapes.py — shape text parser and request validation
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from config import CFG
from models import Position, Shape


@dataclass(frozen=True)
class GenerateRequest:
    shape_text: str
    min_len: int
    max_len: int
    seed: Optional[int] = None


def parse_shape(text: str, mark: Optional[str] = None) -> Shape:
    """
    Turn a text grid into a :class:`Shape`.

    Rows are split on line breaks and right-padded with blanks to the longest
    row; every cell holding ``mark`` becomes a tile at (column, row).
    """
    mark = mark or CFG.MARK_CHAR
    rows = text.split("\n")
    width = max(len(r) for r in rows)
    tiles = set()
    for y, row in enumerate(rows):
        for x, ch in enumerate(row.ljust(width)):
            if ch == mark:
                tiles.add(Position(x, y))
    return Shape(frozenset(tiles), width, len(rows))


def _first(val: Any) -> Any:
    # form posts arrive as lists of strings
    if isinstance(val, (list, tuple)):
        return val[0] if val else None
    return val


def _to_int(x: Any) -> Optional[int]:
    if x is None or isinstance(x, bool):
        return None
    if isinstance(x, int):
        return x
    if isinstance(x, float):
        return int(x) if x.is_integer() else None
    try:
        return int(str(x).strip())
    except ValueError:
        return None


def _normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def parse_generate_request(payload: Any) -> Tuple[Optional[GenerateRequest], Optional[str]]:
    """
    Return (request, None) or (None, error_message).

    Accepts the merged JSON/form mapping built by the app. Nothing here runs
    the solver; a rejected request never reaches it.
    """
    if not isinstance(payload, dict):
        return None, "Invalid input parameters"

    shape_text = _first(payload.get("asciiShape"))
    if not isinstance(shape_text, str) or not shape_text:
        return None, "Shape input is required"
    shape_text = _normalize_newlines(shape_text)

    lo, hi = CFG.MIN_LEN_LIMIT, CFG.MAX_LEN_LIMIT
    min_len = _to_int(_first(payload.get("minSnakeLen")))
    if min_len is None or not lo <= min_len <= hi:
        return None, f"Minimum snake length must be between {lo} and {hi}"
    max_len = _to_int(_first(payload.get("maxSnakeLen")))
    if max_len is None or not lo <= max_len <= hi:
        return None, f"Maximum snake length must be between {lo} and {hi}"
    if min_len > max_len:
        return None, "Minimum snake length must be less than or equal to maximum"

    seed: Optional[int] = None
    raw_seed = _first(payload.get("randomSeed"))
    if raw_seed is not None and raw_seed != "":
        seed = _to_int(raw_seed)
        if seed is None:
            return None, "Random seed must be an integer"

    if CFG.MARK_CHAR not in shape_text:
        return None, f"Shape must contain at least one '{CFG.MARK_CHAR}' character"

    tile_count = shape_text.count(CFG.MARK_CHAR)
    if tile_count > CFG.MAX_TILES:
        return None, f"Shape is too large ({tile_count} tiles, limit {CFG.MAX_TILES})"

    return GenerateRequest(shape_text, min_len, max_len, seed), None


__all__ = ["GenerateRequest", "parse_shape", "parse_generate_request"]
