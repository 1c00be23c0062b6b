# solver/direction.py — head orientation and the face-to-face rule
from typing import Optional, Sequence

from models import DOWN, LEFT, NONE, RIGHT, UP, Position

# Unit step from the head in the direction it faces.
_FACING_STEP = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}


def direction_of(snake: Sequence[Position]) -> str:
    """
    Outward orientation of the head, opposite the step toward the body.

    Single-cell snakes have no orientation.
    """
    if len(snake) < 2:
        return NONE
    head, nxt = snake[0], snake[1]
    if nxt.x > head.x:
        return LEFT
    if nxt.x < head.x:
        return RIGHT
    if nxt.y > head.y:
        return UP
    return DOWN


def face_to_face(
    snake_a: Sequence[Position],
    dir_a: str,
    snake_b: Sequence[Position],
    dir_b: str,
) -> bool:
    """
    True when the two heads stare at each other along a shared row or column.

    Heads pointing away from each other (back to back) are allowed, and
    single-cell snakes never take part.
    """
    if dir_a == NONE or dir_b == NONE:
        return False
    ha, hb = snake_a[0], snake_b[0]

    if ha.y == hb.y and {dir_a, dir_b} == {LEFT, RIGHT}:
        left_head, right_head = (ha, hb) if dir_a == LEFT else (hb, ha)
        return left_head.x > right_head.x

    if ha.x == hb.x and {dir_a, dir_b} == {UP, DOWN}:
        up_head, down_head = (ha, hb) if dir_a == UP else (hb, ha)
        return up_head.y > down_head.y

    return False


def looking_at(snake: Sequence[Position], direction: str) -> Optional[Position]:
    step = _FACING_STEP.get(direction)
    if step is None or not snake:
        return None
    return snake[0].shifted(*step)
