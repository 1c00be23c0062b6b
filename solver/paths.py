# solver/paths.py
from typing import AbstractSet, Iterator, List, Set

from models import Position, Shape, Snake
from solver.adjacency import neighbors
from solver.random_source import RandomSource


def enumerate_paths(
    start: Position,
    shape: Shape,
    globally_used: AbstractSet[Position],
    min_len: int,
    max_len: int,
    rng: RandomSource,
) -> Iterator[Snake]:
    """
    Yield every simple path starting at ``start`` with min_len..max_len tiles.

    Depth-first: a path is yielded as soon as its length is in range, before
    any of its extensions. Eligible neighbours are shuffled with ``rng`` at
    every step, so the yield order is the randomized exploration order.
    Paths never touch ``globally_used`` tiles or revisit their own tiles.
    """
    if start not in shape.tiles or start in globally_used or max_len < 1:
        return

    path: List[Position] = [start]
    on_path: Set[Position] = {start}

    def _extend() -> Iterator[Snake]:
        if len(path) >= min_len:
            yield tuple(path)
        if len(path) >= max_len:
            return
        eligible = [
            n for n in neighbors(path[-1], shape)
            if n not in globally_used and n not in on_path
        ]
        rng.shuffle(eligible)
        for n in eligible:
            path.append(n)
            on_path.add(n)
            yield from _extend()
            on_path.discard(n)
            path.pop()

    yield from _extend()
