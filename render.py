import random
from typing import Any, Dict, List, Sequence, Tuple

from config import CFG


def _color(name: str) -> str:
    rng = random.Random(name)
    r = rng.randint(40, 200)
    g = rng.randint(40, 200)
    b = rng.randint(40, 200)
    return f"rgb({r},{g},{b})"


def _arrow(cx: float, cy: float, direction: str, size: float) -> str:
    # triangle pointing the way the head faces
    s = size * 0.3
    pts: Dict[str, Tuple[Tuple[float, float], ...]] = {
        "up":    ((cx, cy - s), (cx - s, cy + s), (cx + s, cy + s)),
        "down":  ((cx, cy + s), (cx - s, cy - s), (cx + s, cy - s)),
        "left":  ((cx - s, cy), (cx + s, cy - s), (cx + s, cy + s)),
        "right": ((cx + s, cy), (cx - s, cy - s), (cx - s, cy + s)),
    }
    if direction not in pts:
        return ""
    coords = " ".join(f"{x:g},{y:g}" for x, y in pts[direction])
    return f'<polygon points="{coords}" fill="white" stroke="black" stroke-width="1"/>'


def render_result(shapes: Sequence[Dict[str, Any]], Wc: int, Hc: int):
    """Return ``(svg, legend_html)`` for normalized snake shapes."""
    palette: Dict[str, str] = {}
    for s in shapes:
        palette.setdefault(s["type"], _color(s["type"]))

    scale = CFG.CELL_PX
    svg_w = Wc * scale + 2
    svg_h = Hc * scale + 2

    cells: List[str] = []
    for s in shapes:
        fill = palette[s["type"]]
        for p in s["positions"]:
            x = p["x"] * scale + 1
            y = p["y"] * scale + 1
            cells.append(
                f'<rect x="{x}" y="{y}" width="{scale}" height="{scale}" fill="{fill}" stroke="black" stroke-width="1"/>'
            )
        head = s["positions"][0]
        hx = head["x"] * scale + 1
        hy = head["y"] * scale + 1
        cells.append(_arrow(hx + scale / 2, hy + scale / 2, s.get("direction") or "", scale))
        cells.append(
            f'<text x="{hx + 2}" y="{hy + 10}" font-size="9" fill="black">{s["type"]}</text>'
        )
    frame = f'<rect x="1" y="1" width="{svg_w-2}" height="{svg_h-2}" fill="none" stroke="black" stroke-width="2"/>'
    svg = (
        f'<svg class="layout-svg" xmlns="http://www.w3.org/2000/svg" '
        f'width="{svg_w}" height="{svg_h}" '
        f'viewBox="0 0 {svg_w} {svg_h}" preserveAspectRatio="xMinYMin meet">'
        f'{frame}{"".join(cells)}</svg>'
    )

    legend = "".join(
        f"<li><span class='swatch' style='background:{palette[s['type']]}'></span>"
        f"{s['type']} ({len(s['positions'])}, {s.get('direction')})</li>"
        for s in shapes
    )
    return svg, legend
