import pytest

from models import DOWN, LEFT, NONE, RIGHT, UP, Position
from solver.adjacency import degree, degree_map, neighbors
from shapes import parse_shape
from solver.direction import direction_of, face_to_face, looking_at


def P(x, y):
    return Position(x, y)


def test_neighbors_follow_fixed_offset_order():
    shape = parse_shape("###\n###\n###")
    assert neighbors(P(1, 1), shape) == [P(2, 1), P(0, 1), P(1, 2), P(1, 0)]
    assert neighbors(P(0, 0), shape) == [P(1, 0), P(0, 1)]


def test_degree_counts_only_tiles():
    shape = parse_shape("# #\n###")
    assert degree(P(0, 0), shape) == 1
    assert degree(P(1, 1), shape) == 2
    assert degree_map(shape)[P(2, 1)] == 2


@pytest.mark.parametrize(
    "snake, expected",
    [
        ((P(3, 3),), NONE),
        ((P(1, 0), P(2, 0)), LEFT),
        ((P(1, 0), P(0, 0)), RIGHT),
        ((P(0, 1), P(0, 2)), UP),
        ((P(0, 1), P(0, 0)), DOWN),
        ((P(0, 1), P(0, 0), P(1, 0)), DOWN),
    ],
)
def test_direction_of(snake, expected):
    assert direction_of(snake) == expected


def _ftf(a, b):
    return face_to_face(a, direction_of(a), b, direction_of(b))


def test_horizontal_heads_facing():
    right_facing = (P(1, 0), P(0, 0))
    left_facing = (P(3, 0), P(4, 0))
    assert _ftf(right_facing, left_facing)
    assert _ftf(left_facing, right_facing)


def test_horizontal_back_to_back_allowed():
    left_facing = (P(0, 0), P(1, 0))
    right_facing = (P(3, 0), P(2, 0))
    assert not _ftf(left_facing, right_facing)
    assert not _ftf(right_facing, left_facing)


def test_vertical_heads_facing():
    up_facing = (P(0, 3), P(0, 4))
    down_facing = (P(0, 1), P(0, 0))
    assert _ftf(up_facing, down_facing)
    assert _ftf(down_facing, up_facing)


def test_vertical_back_to_back_allowed():
    up_facing = (P(0, 0), P(0, 1))
    down_facing = (P(0, 3), P(0, 2))
    assert not _ftf(up_facing, down_facing)


def test_different_rows_never_face():
    right_facing = (P(1, 0), P(0, 0))
    left_facing = (P(3, 1), P(4, 1))
    assert not _ftf(right_facing, left_facing)


def test_same_direction_never_faces():
    a = (P(1, 0), P(0, 0))
    b = (P(5, 0), P(4, 0))
    assert not _ftf(a, b)


def test_single_cell_snakes_are_exempt():
    single = (P(2, 0),)
    right_facing = (P(1, 0), P(0, 0))
    assert not _ftf(single, right_facing)
    assert not face_to_face(right_facing, RIGHT, single, NONE)


def test_looking_at():
    assert looking_at((P(1, 0), P(0, 0)), RIGHT) == P(2, 0)
    assert looking_at((P(1, 0), P(2, 0)), LEFT) == P(0, 0)
    assert looking_at((P(0, 1), P(0, 2)), UP) == P(0, 0)
    assert looking_at((P(0, 1), P(0, 0)), DOWN) == P(0, 2)
    assert looking_at((P(4, 4),), NONE) is None
