from __future__ import annotations

import contextlib
import io
import json
from pathlib import Path
import tempfile
import unittest
from unittest import mock

from PIL import Image

import main as cli


MIDNIGHT = 1720915200


def _write_prices(directory: Path, count: int = 6) -> Path:
    path = directory / "prices.json"
    rows = [{"value": 100.0 + (i % 3) * 12.5, "timestamp": MIDNIGHT + i * 3600} for i in range(count)]
    path.write_text(json.dumps(rows), encoding="utf-8")
    return path


class CliTests(unittest.TestCase):
    def test_render_png(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tmp_path = Path(tmp)
            prices = _write_prices(tmp_path)
            out = tmp_path / "chart.png"
            stdout = io.StringIO()
            with contextlib.redirect_stdout(stdout):
                cli.main(["render", str(prices), "--out", str(out), "--width", "640", "--height", "360"])
            with Image.open(out) as img:
                self.assertEqual(img.size, (640, 360))
            self.assertIn("render complete: points=6", stdout.getvalue())

    def test_render_svg_with_selection_and_style(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tmp_path = Path(tmp)
            prices = _write_prices(tmp_path)
            style = tmp_path / "style.json"
            style.write_text(json.dumps({"chart_line_color": "#ff0000"}), encoding="utf-8")
            out = tmp_path / "chart.svg"
            with mock.patch("linechart.renderer.PillowTextMeasurer") as measurer_cls:
                from linechart.text import MonospaceTextMeasurer

                measurer_cls.return_value = MonospaceTextMeasurer()
                stdout = io.StringIO()
                with contextlib.redirect_stdout(stdout):
                    cli.main(["render", str(prices), "--out", str(out), "--style", str(style), "--select-x", "90"])
            markup = out.read_text(encoding="utf-8")
            self.assertIn('stroke="rgb(255,0,0)"', markup)
            self.assertIn("<circle", markup)
            self.assertIn("selected=0", stdout.getvalue())

    def test_rejects_unknown_output_extension(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            prices = _write_prices(Path(tmp))
            with contextlib.redirect_stderr(io.StringIO()):
                with self.assertRaises(SystemExit) as ctx:
                    cli.main(["render", str(prices), "--out", str(Path(tmp) / "chart.gif")])
            self.assertEqual(ctx.exception.code, 2)

    def test_reports_malformed_prices(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            prices = Path(tmp) / "prices.json"
            prices.write_text(json.dumps([{"value": "abc", "timestamp": MIDNIGHT}]), encoding="utf-8")
            stderr = io.StringIO()
            with contextlib.redirect_stderr(stderr):
                with self.assertRaises(SystemExit):
                    cli.main(["render", str(prices), "--out", str(Path(tmp) / "chart.png")])
            self.assertIn("values must be numeric", stderr.getvalue())


if __name__ == "__main__":
    unittest.main()
