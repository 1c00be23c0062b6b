# solver/adjacency.py
from typing import Dict, List

from models import Position, Shape

# Fixed enumeration order; callers shuffle when they need variety.
OFFSETS = ((1, 0), (-1, 0), (0, 1), (0, -1))


def neighbors(pos: Position, shape: Shape) -> List[Position]:
    out: List[Position] = []
    for dx, dy in OFFSETS:
        np_ = Position(pos.x + dx, pos.y + dy)
        if np_ in shape.tiles:
            out.append(np_)
    return out


def degree(pos: Position, shape: Shape) -> int:
    return len(neighbors(pos, shape))


def degree_map(shape: Shape) -> Dict[Position, int]:
    """Degree of every tile, computed once per shape."""
    return {p: degree(p, shape) for p in shape.tiles}
