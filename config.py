# config.py
import os

# ======= Shape text =======
MARK_CHAR = os.getenv("SG_MARK_CHAR", "#")[:1] or "#"

# ======= Request limits =======
MIN_LEN_LIMIT = int(os.getenv("SG_MIN_LEN_LIMIT", "1"))
MAX_LEN_LIMIT = int(os.getenv("SG_MAX_LEN_LIMIT", "11"))

# The solver recurses once per placed snake, so very large shapes are
# rejected up front instead of running into the interpreter recursion limit.
MAX_TILES = int(os.getenv("SG_MAX_TILES", "600"))

# ======= Search caps =======
MAX_ATTEMPTS   = int(os.getenv("SG_MAX_ATTEMPTS", "200"))
ITERATION_CAP  = int(os.getenv("SG_ITERATION_CAP", "20000"))

# Wall-clock budget for a whole run, checked between attempts (0 disables).
TIME_LIMIT = float(os.getenv("SG_TIME_LIMIT", "30"))

# ======= Rendering =======
CELL_PX = int(os.getenv("SG_CELL_PX", "32"))

# ======= Output names =======
SHAPES_JSON_OUT = os.getenv("SG_SHAPES_JSON_OUT", "snakeShapes.json")
LAYOUT_HTML     = os.getenv("SG_LAYOUT_HTML", "layout_view.html")


class CFG:
    MARK_CHAR = MARK_CHAR

    MIN_LEN_LIMIT = MIN_LEN_LIMIT
    MAX_LEN_LIMIT = MAX_LEN_LIMIT
    MAX_TILES     = MAX_TILES

    MAX_ATTEMPTS  = MAX_ATTEMPTS
    ITERATION_CAP = ITERATION_CAP
    TIME_LIMIT    = TIME_LIMIT

    CELL_PX = CELL_PX

    SHAPES_JSON_OUT = SHAPES_JSON_OUT
    LAYOUT_HTML     = LAYOUT_HTML


__all__ = ["CFG"]
