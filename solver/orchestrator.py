# Orchestrator: repeated bounded attempts until one tiles the shape
from __future__ import annotations

import time
from typing import Any, Callable, Dict, List, Optional, Sequence

from config import CFG
from models import Position, Shape, Snake, TilingResult
from progress import log_attempt_detail
from shapes import parse_shape
from solver.adjacency import degree_map
from solver.backtracking import solve_attempt, validate_tiling
from solver.direction import direction_of, looking_at
from solver.random_source import make_random_source

EXHAUSTED_REASON = (
    "Failed to generate snake pattern after many attempts. "
    "Try adjusting parameters or simplifying the shape."
)

AttemptCallback = Callable[[int, int, Dict[str, object]], None]


class TilingInvariantError(RuntimeError):
    """A solution came back from the solver that is not a valid tiling."""


def _check_solution(shape: Shape, snakes: List[Snake], min_len: int, max_len: int) -> None:
    problems = validate_tiling(shape, snakes, min_len, max_len)
    if problems:
        raise TilingInvariantError("; ".join(problems))


def generate_tiling(
    shape_text: str,
    min_len: int,
    max_len: int,
    seed: Optional[int] = None,
    max_attempts: Optional[int] = None,
    *,
    iteration_cap: Optional[int] = None,
    time_limit: Optional[float] = None,
    on_attempt: Optional[AttemptCallback] = None,
) -> TilingResult:
    """
    Parse ``shape_text`` once and run the solver up to ``max_attempts`` times.

    A seeded stream is shared by all attempts so each explores a different
    ordering while the whole run stays reproducible. The result carries the
    1-based attempt that succeeded, or the number of attempts made.
    """
    if max_attempts is None:
        max_attempts = CFG.MAX_ATTEMPTS
    if iteration_cap is None:
        iteration_cap = CFG.ITERATION_CAP
    if time_limit is None:
        time_limit = CFG.TIME_LIMIT
    max_attempts = max(1, int(max_attempts))

    t0 = time.time()
    shape = parse_shape(shape_text)
    rng = make_random_source(seed)
    degrees = degree_map(shape)

    log_attempt_detail(
        "Run setup",
        tiles=len(shape.tiles),
        grid=f"{shape.width}x{shape.height}",
        min_len=min_len,
        max_len=max_len,
        seed="ambient" if seed is None else seed,
        max_attempts=max_attempts,
        iteration_cap=iteration_cap,
    )

    attempts = 0
    timed_out = False
    total_iterations = 0
    for attempt in range(1, max_attempts + 1):
        attempts = attempt
        snakes, stats = solve_attempt(
            shape, min_len, max_len, rng, iteration_cap, degrees=degrees
        )
        total_iterations += int(stats["iterations"])
        if on_attempt is not None:
            on_attempt(attempt, max_attempts, stats)

        if snakes is not None:
            _check_solution(shape, snakes, min_len, max_len)
            log_attempt_detail(
                "Tiling found",
                attempt=attempt,
                snakes=len(snakes),
                iterations=stats["iterations"],
                elapsed=f"{time.time() - t0:.2f}s",
            )
            return TilingResult(
                ok=True,
                snakes=snakes,
                attempts=attempt,
                meta={
                    "width": shape.width,
                    "height": shape.height,
                    "total_iterations": total_iterations,
                },
            )

        log_attempt_detail(
            "Attempt failed",
            attempt=attempt,
            result=stats["result"],
            iterations=stats["iterations"],
        )
        if time_limit and time.time() - t0 >= time_limit and attempt < max_attempts:
            timed_out = True
            break

    log_attempt_detail(
        "Attempts exhausted",
        attempts=attempts,
        timed_out=timed_out,
        elapsed=f"{time.time() - t0:.2f}s",
    )
    return TilingResult(
        ok=False,
        attempts=attempts,
        reason=EXHAUSTED_REASON,
        meta={
            "width": shape.width,
            "height": shape.height,
            "total_iterations": total_iterations,
            "timed_out": timed_out,
        },
    )


def _pos_json(pos: Optional[Position]) -> Optional[Dict[str, int]]:
    return None if pos is None else pos.to_json()


def snakes_to_json(snakes: Sequence[Snake]) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for i, snake in enumerate(snakes, start=1):
        direction = direction_of(snake)
        out.append({
            "type": f"Snake{i}",
            "startPos": _pos_json(snake[0]),
            "direction": direction,
            "lookingAt": _pos_json(looking_at(snake, direction)),
            "positions": [p.to_json() for p in snake],
        })
    return out
