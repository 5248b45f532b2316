from __future__ import annotations

import argparse
import logging
from pathlib import Path

from linechart import DEFAULT_STYLE, ChartDataError, LineChart, load_chart_style
from linechart.adapters import load_price_history
from linechart.export import save_svg
from linechart.raster import save_png
from linechart.raster.backend import DEFAULT_BACKGROUND


LOGGER = logging.getLogger("linechart.cli")

OUTPUT_FORMATS = {".png": "png", ".svg": "svg"}


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="linechart")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a JSON price history to PNG or SVG.")
    render.add_argument("prices", type=Path, help='JSON list of {"value", "timestamp"} objects')
    render.add_argument("--out", type=Path, required=True, help="output file (.png or .svg)")
    render.add_argument("--width", type=int, default=1000)
    render.add_argument("--height", type=int, default=562)
    render.add_argument("--unit", default="", help="suffix appended to value labels, e.g. $")
    render.add_argument("--style", type=Path, default=None, help="JSON object of chart style overrides")
    render.add_argument(
        "--select-x",
        type=float,
        default=None,
        help="simulate a drag to this canvas x before drawing",
    )
    render.add_argument("--no-helper-lines", action="store_true")
    render.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
    )
    args = parser.parse_args(argv)

    if args.command == "render":
        logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
        fmt = OUTPUT_FORMATS.get(args.out.suffix.lower())
        if fmt is None:
            parser.error(f"--out must end in one of {sorted(OUTPUT_FORMATS)}")
        if args.width <= 0 or args.height <= 0:
            parser.error("--width and --height must be positive")
        try:
            points = load_price_history(args.prices)
            style = load_chart_style(args.style) if args.style is not None else DEFAULT_STYLE
        except FileNotFoundError as exc:
            parser.error(f"file not found: {exc.filename}")
        except (ChartDataError, ValueError) as exc:
            parser.error(str(exc))

        chart = LineChart(style, unit=args.unit, show_helper_lines=not args.no_helper_lines)
        canvas = (float(args.width), float(args.height))
        batch = chart.render_latest(points, canvas)
        if args.select_x is not None:
            result = chart.on_drag_update(args.select_x)
            chart.on_drag_end()
            if result.data_point is None:
                LOGGER.warning("no visible point near x=%s", args.select_x)
            batch = chart.redraw()

        if fmt == "png":
            save_png(batch, args.out, background=DEFAULT_BACKGROUND)
        else:
            save_svg(batch, args.out, background=DEFAULT_BACKGROUND)
        start, end = chart.layout.visible_range
        print(
            f"render complete: points={len(points)} visible={start}..{end} "
            f"selected={chart.selected_index} out={args.out}"
        )
        return

    raise RuntimeError(f"unsupported command: {args.command}")


if __name__ == "__main__":
    main()
