from __future__ import annotations

from pathlib import Path
import xml.etree.ElementTree as ET

from linechart.curve import CubicTo, MoveTo, PathCommands
from linechart.draw import CircleCommand, DrawBatch, LineCommand, PathCommand, TextCommand
from linechart.style import RGBA


SVG_NS = "http://www.w3.org/2000/svg"
LINE_HEIGHT_RATIO = 1.2


def to_svg_markup(batch: DrawBatch, *, background: RGBA | None = None) -> str:
    root = ET.Element(
        "svg",
        {
            "xmlns": SVG_NS,
            "width": _num(batch.width),
            "height": _num(batch.height),
            "viewBox": f"0 0 {_num(batch.width)} {_num(batch.height)}",
        },
    )
    if background is not None:
        ET.SubElement(root, "rect", {"x": "0", "y": "0", "width": "100%", "height": "100%", **_paint("fill", background)})
    for cmd in batch.commands:
        if isinstance(cmd, LineCommand):
            ET.SubElement(
                root,
                "line",
                {
                    "x1": _num(cmd.x1),
                    "y1": _num(cmd.y1),
                    "x2": _num(cmd.x2),
                    "y2": _num(cmd.y2),
                    "stroke-width": _num(cmd.stroke_width),
                    **_paint("stroke", cmd.color),
                },
            )
        elif isinstance(cmd, PathCommand):
            ET.SubElement(
                root,
                "path",
                {
                    "d": path_data(cmd.path),
                    "fill": "none",
                    "stroke-width": _num(cmd.stroke_width),
                    "stroke-linecap": cmd.cap,
                    **_paint("stroke", cmd.color),
                },
            )
        elif isinstance(cmd, CircleCommand):
            attrs = {"cx": _num(cmd.cx), "cy": _num(cmd.cy), "r": _num(cmd.radius)}
            if cmd.stroke_width is None:
                attrs.update(_paint("fill", cmd.color))
            else:
                attrs.update({"fill": "none", "stroke-width": _num(cmd.stroke_width), **_paint("stroke", cmd.color)})
            ET.SubElement(root, "circle", attrs)
        elif isinstance(cmd, TextCommand):
            _append_text(root, cmd)
    return ET.tostring(root, encoding="unicode")


def save_svg(batch: DrawBatch, path: Path, *, background: RGBA | None = None) -> Path:
    Path(path).write_text(to_svg_markup(batch, background=background), encoding="utf-8")
    return path


def path_data(path: PathCommands) -> str:
    parts: list[str] = []
    for seg in path.segments:
        if isinstance(seg, MoveTo):
            parts.append(f"M {_num(seg.x)} {_num(seg.y)}")
        elif isinstance(seg, CubicTo):
            parts.append(
                f"C {_num(seg.x1)} {_num(seg.y1)}, {_num(seg.x2)} {_num(seg.y2)}, {_num(seg.x3)} {_num(seg.y3)}"
            )
    return " ".join(parts)


def _append_text(root: ET.Element, cmd: TextCommand) -> None:
    if not cmd.text:
        return
    lines = cmd.text.split("\n")
    center_x = cmd.x + cmd.width / 2.0
    node = ET.SubElement(
        root,
        "text",
        {
            "x": _num(center_x),
            "y": _num(cmd.y),
            "font-size": _num(cmd.font_size_px),
            "text-anchor": "middle",
            **_paint("fill", cmd.color),
        },
    )
    for i, line in enumerate(lines):
        dy = cmd.font_size_px if i == 0 else cmd.font_size_px * LINE_HEIGHT_RATIO
        tspan = ET.SubElement(node, "tspan", {"x": _num(center_x), "dy": _num(dy)})
        tspan.text = line


def _paint(attr: str, color: RGBA) -> dict[str, str]:
    r, g, b, a = color
    out = {attr: f"rgb({r},{g},{b})"}
    if a < 255:
        out[f"{attr}-opacity"] = _num(a / 255.0)
    return out


def _num(value: float) -> str:
    out = f"{float(value):.3f}".rstrip("0").rstrip(".")
    return "0" if out in ("", "-0") else out
