# app.py — snake generation endpoint, result page, exports and progress
from __future__ import annotations
import os
import time
from typing import Any, Dict, Tuple

from flask import Flask, request, render_template, send_from_directory, jsonify, url_for

from solver.orchestrator import generate_tiling, snakes_to_json
from shapes import parse_generate_request
from config import CFG
from io_files import layout_html_path, shapes_json_path, write_shapes_json, write_layout_view_html
from render import render_result

from progress import (
    reset as progress_reset,
    as_json as progress_json,
    start_timer as progress_start,
    log_error,
    set_status, set_attempt, set_tile_count, set_done, set_result_url,
)

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

INTERNAL_ERROR = "Internal server error occurred while generating pattern"

DEFAULT_SHAPE = "\n".join([
    "   ######  ######",
    " ######## ########",
    " ###################",
    "  #################",
    "    #############",
    "      #########",
    "        #######",
    "          ###",
    "           #",
])
DEFAULT_MIN_LEN = 1
DEFAULT_MAX_LEN = 7

LAST_RESULT: Dict[str, Any] = {
    "ok": False,
    "message": "Nothing generated yet.",
    "W": 0,
    "H": 0,
    "attempts": 0,
    "snake_count": 0,
    "tile_count": 0,
    "elapsed_str": "0s",
    "svg": "",
    "legend": "",
}

app = Flask(__name__, template_folder="templates")


@app.after_request
def _no_cache_progress(resp):
    if request.path == "/progress3":
        resp.headers["Cache-Control"] = "no-store, max-age=0"
        resp.headers["Pragma"] = "no-cache"
        resp.headers["Expires"] = "0"
    return resp


@app.route("/")
def index():
    return render_template(
        "index.html",
        shape=DEFAULT_SHAPE,
        min_len=DEFAULT_MIN_LEN,
        max_len=DEFAULT_MAX_LEN,
        len_limit=CFG.MAX_LEN_LIMIT,
    )


@app.route("/result/latest")
def result_latest():
    return render_template(
        "result.html",
        json_filename=os.path.basename(shapes_json_path(BASE_DIR)),
        layout_filename=os.path.basename(layout_html_path(BASE_DIR)),
        **LAST_RESULT,
    )


def _fmt_elapsed(seconds: float) -> str:
    if seconds < 1:
        return "0s"
    m, s = divmod(int(seconds), 60)
    if m == 0:
        return f"{s}s"
    h, m = divmod(m, 60)
    if h == 0:
        return f"{m}m {s}s"
    return f"{h}h {m}m {s}s"


def _merge_like_mapping() -> Dict[str, Any]:
    merged: Dict[str, Any] = {}
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        merged.update(payload)

    for k, v in request.form.to_dict(flat=False).items():
        merged.setdefault(k, v)

    for k, v in request.args.to_dict(flat=False).items():
        merged.setdefault(k, v)

    return merged


def _record_attempt(attempt: int, max_attempts: int, stats: Dict[str, object]) -> None:
    set_attempt(attempt, max_attempts, stats.get("iterations"))


def _publish_outputs(shapes, width: int, height: int) -> Tuple[str, str]:
    """Render the layout and write both exports; failures only cost the files."""
    svg_markup, legend_html = render_result(shapes, width, height)
    try:
        write_shapes_json(shapes, BASE_DIR)
    except OSError as e:
        log_error("JSON export failed", error=e)
    try:
        write_layout_view_html(
            svg_markup, legend_html, BASE_DIR, grid_label=f"{width} × {height} cells"
        )
    except OSError as e:
        log_error("Layout export failed", error=e)
    return svg_markup, legend_html


@app.route("/api/generate", methods=["POST"])
def generate():
    progress_reset()
    progress_start()
    set_status("Solving")

    t0 = time.time()
    like = _merge_like_mapping()
    req, err = parse_generate_request(like)
    if err:
        set_done(False, reason=err)
        return jsonify({"success": False, "error": err}), 400

    set_tile_count(req.shape_text.count(CFG.MARK_CHAR))

    try:
        result = generate_tiling(
            req.shape_text,
            req.min_len,
            req.max_len,
            req.seed,
            on_attempt=_record_attempt,
        )
    except Exception as e:
        log_error("Generator exception", error=f"{type(e).__name__}: {e}")
        set_done(False, reason=INTERNAL_ERROR)
        return jsonify({"success": False, "error": INTERNAL_ERROR}), 500

    width = int(result.meta.get("width") or 0)
    height = int(result.meta.get("height") or 0)

    if not result.ok:
        set_done(False, reason=result.reason)
        LAST_RESULT.update({
            "ok": False,
            "message": result.reason,
            "W": width,
            "H": height,
            "attempts": result.attempts,
            "snake_count": 0,
            "tile_count": req.shape_text.count(CFG.MARK_CHAR),
            "elapsed_str": _fmt_elapsed(time.time() - t0),
            "svg": "",
            "legend": "",
        })
        set_result_url(url_for("result_latest"))
        return jsonify({
            "success": False,
            "error": result.reason,
            "attempts": result.attempts,
        })

    shapes = snakes_to_json(result.snakes)
    svg_markup, legend_html = _publish_outputs(shapes, width, height)

    message = f"Solved on attempt {result.attempts}"
    set_done(True, reason=message)
    LAST_RESULT.update({
        "ok": True,
        "message": message,
        "W": width,
        "H": height,
        "attempts": result.attempts,
        "snake_count": len(shapes),
        "tile_count": req.shape_text.count(CFG.MARK_CHAR),
        "elapsed_str": _fmt_elapsed(time.time() - t0),
        "svg": svg_markup,
        "legend": legend_html,
    })
    set_result_url(url_for("result_latest"))
    return jsonify({"success": True, "shapes": shapes, "attempts": result.attempts})


@app.route("/download/json")
def download_json():
    path = shapes_json_path(BASE_DIR)
    return send_from_directory(os.path.dirname(path), os.path.basename(path), as_attachment=True)


@app.route("/download/html")
def download_html():
    path = layout_html_path(BASE_DIR)
    return send_from_directory(os.path.dirname(path), os.path.basename(path), as_attachment=True)


@app.route("/progress3")
def progress3():
    return jsonify(progress_json())


if __name__ == "__main__":
    app.run(debug=False)
