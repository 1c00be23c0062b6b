import json
import types

import pytest

from models import LEFT, NONE, RIGHT, Position
from shapes import parse_shape
from solver import orchestrator
from solver.backtracking import validate_tiling
from solver.direction import direction_of
from solver.orchestrator import (
    EXHAUSTED_REASON,
    TilingInvariantError,
    generate_tiling,
    snakes_to_json,
)
from tests.data import BLOCK_2X3, BLOCK_3X3, HEART, PAIR_ROW, QUAD_ROW, RING, TRIPLE_ROW


def P(x, y):
    return Position(x, y)


def test_pair_row_solved_first_attempt():
    result = generate_tiling(PAIR_ROW, 2, 2, seed=1, max_attempts=10)
    assert result.ok
    assert result.attempts == 1
    assert len(result.snakes) == 1
    assert len(result.snakes[0]) == 2
    assert direction_of(result.snakes[0]) in (LEFT, RIGHT)


def test_block_3x3_partition_covers_all_cells():
    result = generate_tiling(BLOCK_3X3, 1, 9, seed=7, max_attempts=10)
    assert result.ok
    assert 1 <= result.attempts <= 10
    covered = [p for s in result.snakes for p in s]
    assert sorted(covered, key=lambda p: (p.y, p.x)) == sorted(parse_shape(BLOCK_3X3).tiles, key=lambda p: (p.y, p.x))


@pytest.mark.parametrize("seed", [1, 5, 123])
def test_quad_row_pairs_face_away(seed):
    result = generate_tiling(QUAD_ROW, 2, 2, seed=seed, max_attempts=5)
    assert result.ok
    assert [direction_of(s) for s in result.snakes] == [LEFT, RIGHT]


def test_exhaustion_reports_attempt_cap():
    result = generate_tiling(TRIPLE_ROW, 2, 2, seed=1, max_attempts=5)
    assert not result.ok
    assert result.snakes == []
    assert result.attempts == 5
    assert result.reason == EXHAUSTED_REASON
    assert result.meta["timed_out"] is False


def test_same_seed_same_result():
    a = generate_tiling(HEART, 2, 5, seed=2024, max_attempts=20, iteration_cap=3000)
    b = generate_tiling(HEART, 2, 5, seed=2024, max_attempts=20, iteration_cap=3000)
    assert a.ok == b.ok
    assert a.attempts == b.attempts
    assert json.dumps(snakes_to_json(a.snakes)) == json.dumps(snakes_to_json(b.snakes))


@pytest.mark.parametrize("text, lo, hi", [(BLOCK_2X3, 2, 3), (RING, 2, 4), (HEART, 1, 4)])
def test_successful_runs_are_valid(text, lo, hi):
    result = generate_tiling(text, lo, hi, seed=3, max_attempts=20)
    assert result.ok
    assert validate_tiling(parse_shape(text), result.snakes, lo, hi) == []


def test_unseeded_run_succeeds():
    result = generate_tiling(BLOCK_2X3, 2, 3, max_attempts=10)
    assert result.ok


def test_attempt_callback_sees_every_attempt():
    seen = []

    def on_attempt(attempt, max_attempts, stats):
        seen.append((attempt, max_attempts, stats["result"]))

    generate_tiling(TRIPLE_ROW, 2, 2, seed=1, max_attempts=3, on_attempt=on_attempt)
    assert seen == [(1, 3, "exhausted"), (2, 3, "exhausted"), (3, 3, "exhausted")]


def test_defaults_come_from_config(monkeypatch):
    monkeypatch.setattr(orchestrator.CFG, "MAX_ATTEMPTS", 4)
    result = generate_tiling(TRIPLE_ROW, 2, 2, seed=1)
    assert result.attempts == 4


def test_time_limit_stops_between_attempts(monkeypatch):
    clock = {"now": 0.0}

    def fake_time():
        clock["now"] += 10.0
        return clock["now"]

    monkeypatch.setattr(orchestrator, "time", types.SimpleNamespace(time=fake_time))
    result = generate_tiling(TRIPLE_ROW, 2, 2, seed=1, max_attempts=50, time_limit=1.0)
    assert not result.ok
    assert result.attempts == 1
    assert result.meta["timed_out"] is True


def test_invalid_solution_is_a_fatal_defect(monkeypatch):
    def broken_attempt(shape, min_len, max_len, rng, cap, degrees=None):
        return [(P(0, 0),)], {"iterations": 1, "result": "solved"}

    monkeypatch.setattr(orchestrator, "solve_attempt", broken_attempt)
    with pytest.raises(TilingInvariantError):
        generate_tiling(PAIR_ROW, 1, 2, seed=1, max_attempts=1)


def test_snakes_to_json_shapes():
    snakes = [(P(1, 0), P(0, 0)), (P(3, 2),)]
    out = snakes_to_json(snakes)
    assert out == [
        {
            "type": "Snake1",
            "startPos": {"x": 1, "y": 0},
            "direction": RIGHT,
            "lookingAt": {"x": 2, "y": 0},
            "positions": [{"x": 1, "y": 0}, {"x": 0, "y": 0}],
        },
        {
            "type": "Snake2",
            "startPos": {"x": 3, "y": 2},
            "direction": NONE,
            "lookingAt": None,
            "positions": [{"x": 3, "y": 2}],
        },
    ]
