from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

UP = "up"
DOWN = "down"
LEFT = "left"
RIGHT = "right"
NONE = "none"


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    def shifted(self, dx: int, dy: int) -> "Position":
        return Position(self.x + dx, self.y + dy)

    def to_json(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y}


def reading_order(pos: Position) -> Tuple[int, int]:
    """Row-major sort key: top row first, then left to right."""
    return (pos.y, pos.x)


@dataclass(frozen=True)
class Shape:
    tiles: FrozenSet[Position]
    width: int
    height: int

    def __contains__(self, pos: object) -> bool:
        return pos in self.tiles

    def __len__(self) -> int:
        return len(self.tiles)


# A snake is a tuple of positions; the first one is the head.
Snake = Tuple[Position, ...]


@dataclass
class PlacedSnake:
    positions: Snake
    direction: str


@dataclass
class TilingResult:
    ok: bool
    snakes: List[Snake] = field(default_factory=list)
    attempts: int = 0
    reason: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)
