# solver/backtracking.py — exact partition of a shape into snakes
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set, Tuple

from models import PlacedSnake, Position, Shape, Snake, reading_order
from solver.adjacency import OFFSETS, degree_map
from solver.direction import direction_of, face_to_face
from solver.paths import enumerate_paths
from solver.random_source import RandomSource


@dataclass
class SearchState:
    """Mutable state of one attempt. Never shared between attempts."""

    unplaced: Set[Position]
    iteration_cap: int
    placed: List[PlacedSnake] = field(default_factory=list)
    iterations: int = 0
    cap_hit: bool = False

    def commit(self, snake: Snake, direction: str) -> None:
        self.unplaced.difference_update(snake)
        self.placed.append(PlacedSnake(snake, direction))

    def undo(self) -> None:
        last = self.placed.pop()
        self.unplaced.update(last.positions)


def _fits(state: SearchState, snake: Snake, direction: str) -> bool:
    for pos in snake:
        if pos not in state.unplaced:
            return False
    for other in state.placed:
        if face_to_face(snake, direction, other.positions, other.direction):
            return False
    return True


def solve_attempt(
    shape: Shape,
    min_len: int,
    max_len: int,
    rng: RandomSource,
    iteration_cap: int,
    *,
    degrees: Optional[Dict[Position, int]] = None,
) -> Tuple[Optional[List[Snake]], Dict[str, object]]:
    """
    Run one bounded backtracking attempt.

    Returns ``(snakes, stats)``; ``snakes`` is None when the candidates ran out
    or the iteration cap was exceeded. Neither case is an error.
    """
    if degrees is None:
        degrees = degree_map(shape)
    state = SearchState(unplaced=set(shape.tiles), iteration_cap=max(1, int(iteration_cap)))

    def _pick_cell() -> Position:
        # most constrained first; ties resolved in reading order
        return min(state.unplaced, key=lambda p: (degrees[p], reading_order(p)))

    def _search() -> bool:
        if not state.unplaced:
            return True
        state.iterations += 1
        if state.iterations > state.iteration_cap:
            state.cap_hit = True
            return False

        start = _pick_cell()
        used = shape.tiles - state.unplaced
        for candidate in enumerate_paths(start, shape, used, min_len, max_len, rng):
            direction = direction_of(candidate)
            if not _fits(state, candidate, direction):
                continue
            state.commit(candidate, direction)
            if _search():
                return True
            # past the cap a branch only survives if this candidate finished the shape
            state.undo()
        return False

    solved = _search()
    stats: Dict[str, object] = {
        "tiles": len(shape.tiles),
        "iterations": state.iterations,
        "iteration_cap": state.iteration_cap,
        "cap_hit": state.cap_hit,
        "snakes": len(state.placed),
        "result": "solved" if solved else ("iteration_cap" if state.cap_hit else "exhausted"),
    }
    if not solved:
        return None, stats
    return [p.positions for p in state.placed], stats


def validate_tiling(
    shape: Shape,
    snakes: Sequence[Sequence[Position]],
    min_len: int,
    max_len: int,
) -> List[str]:
    """Return every way ``snakes`` fails to be a valid tiling of ``shape``."""
    problems: List[str] = []
    seen: Set[Position] = set()
    steps = set(OFFSETS)

    for idx, snake in enumerate(snakes, start=1):
        if not min_len <= len(snake) <= max_len:
            problems.append(f"snake {idx}: length {len(snake)} outside [{min_len}, {max_len}]")
        for pos in snake:
            if pos not in shape.tiles:
                problems.append(f"snake {idx}: ({pos.x},{pos.y}) is not a tile")
            if pos in seen:
                problems.append(f"snake {idx}: ({pos.x},{pos.y}) already covered")
            seen.add(pos)
        for a, b in zip(snake, snake[1:]):
            if (b.x - a.x, b.y - a.y) not in steps:
                problems.append(f"snake {idx}: ({a.x},{a.y}) -> ({b.x},{b.y}) is not a step")

    missing = shape.tiles - seen
    if missing:
        problems.append(f"{len(missing)} tile(s) not covered")

    dirs = [direction_of(s) for s in snakes]
    for i in range(len(snakes)):
        for j in range(i + 1, len(snakes)):
            if face_to_face(snakes[i], dirs[i], snakes[j], dirs[j]):
                problems.append(f"snakes {i + 1} and {j + 1} face each other")
    return problems
