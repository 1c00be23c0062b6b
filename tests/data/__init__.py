from tests.data.sample_shapes import (
    BLOCK_2X3,
    BLOCK_3X3,
    BLOCK_4X4,
    HEART,
    PAIR_ROW,
    QUAD_ROW,
    RING,
    TRIPLE_ROW,
)

__all__ = [
    "BLOCK_2X3",
    "BLOCK_3X3",
    "BLOCK_4X4",
    "HEART",
    "PAIR_ROW",
    "QUAD_ROW",
    "RING",
    "TRIPLE_ROW",
]
