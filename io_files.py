"""Helpers for writing generator outputs to disk."""

from __future__ import annotations

import json
import os
from typing import Any, Dict, List, Optional

from config import CFG


def _resolve_output_path(base_dir: str, configured_name: str, fallback: str) -> str:
    """Return the absolute path where an output artifact should be written."""

    name = (configured_name or "").strip() or fallback
    if os.path.isabs(name):
        return name
    return os.path.abspath(os.path.join(base_dir, name))


def shapes_json_path(base_dir: str) -> str:
    return _resolve_output_path(base_dir, CFG.SHAPES_JSON_OUT, "snakeShapes.json")


def layout_html_path(base_dir: str) -> str:
    return _resolve_output_path(base_dir, CFG.LAYOUT_HTML, "layout_view.html")


def write_shapes_json(shapes: List[Dict[str, Any]], base_dir: str) -> str:
    """Write the normalized snakes as ``{"shapes": [...]}`` to the configured file."""

    path = shapes_json_path(base_dir)
    os.makedirs(os.path.dirname(path), exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump({"shapes": shapes}, f, indent=2)
        f.write("\n")
    return path


def write_layout_view_html(
    svg: str, legend_html: str, base_dir: str, grid_label: Optional[str] = None
) -> str:
    """Write the rendered SVG/legend preview to the configured HTML file."""

    path = layout_html_path(base_dir)
    os.makedirs(os.path.dirname(path), exist_ok=True)

    heading = f"<p class='grid-label'>{grid_label}</p>" if grid_label else ""
    with open(path, "w", encoding="utf-8") as vf:
        vf.write(
            f"""<!doctype html>
<html><head><meta charset='utf-8'><title>Snake Layout</title>
<style>body{{font-family:sans-serif}}.swatch{{display:inline-block;width:12px;height:12px;margin-right:6px}}</style></head>
<body class='container'>
<h1>Snake Layout</h1>{heading}
<section class='card'><div class='gridwrap'>{svg}</div></section>
<section class='card'><h3>Legend</h3><ul>{legend_html}</ul></section>
</body></html>"""
        )
    return path


__all__ = ["shapes_json_path", "layout_html_path", "write_shapes_json", "write_layout_view_html"]
