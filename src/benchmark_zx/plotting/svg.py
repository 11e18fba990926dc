"""Minimal self-contained SVG line charts."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping
from xml.sax.saxutils import escape, quoteattr

from benchmark_zx.benchmarks.schema import Series
from benchmark_zx.config import BenchConfig
from benchmark_zx.errors import NoData, OutputUnavailable

PALETTE = ("red", "blue", "green", "magenta", "cyan")
GRID_TICKS = 6
FONT = 'font-family="sans-serif"'

PLOT_FILES = {
    "alpha": "nterms_plot.svg",
    "times": "runtime_plot.svg",
}

_TITLES = {
    "alpha": ("Average log(n_terms) vs t_count", "log(mean n_terms)"),
    "times": ("Average log(runtime) vs t_count", "log(runtime in ms)"),
}


@dataclass(frozen=True)
class PlotSpec:
    title: str
    y_label: str
    x_range: tuple[float, float]
    x_label: str = "t_count"
    width: float = 800.0
    height: float = 600.0
    margin: float = 50.0


def plot_spec_for(kind: str, config: BenchConfig) -> PlotSpec:
    try:
        title, y_label = _TITLES[kind]
    except KeyError:
        raise ValueError(f"Unknown plot kind '{kind}'") from None
    return PlotSpec(
        title=title,
        y_label=y_label,
        x_range=(float(config.min_tcount), float(config.max_tcount - 1)),
    )


def _padded(low: float, high: float) -> tuple[float, float]:
    if high > low:
        return low, high
    return low - 0.5, high + 0.5


@dataclass(frozen=True)
class Canvas:
    """Affine map from data space to the plot area (y grows downwards)."""

    width: float
    height: float
    margin: float
    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @classmethod
    def fit(cls, spec: PlotSpec, y_min: float, y_max: float) -> Canvas:
        x_min, x_max = _padded(*spec.x_range)
        y_min, y_max = _padded(y_min, y_max)
        return cls(spec.width, spec.height, spec.margin, x_min, x_max, y_min, y_max)

    @property
    def plot_width(self) -> float:
        return self.width - 2.0 * self.margin

    @property
    def plot_height(self) -> float:
        return self.height - 2.0 * self.margin

    def map_x(self, value: float) -> float:
        return self.margin + (value - self.x_min) / (self.x_max - self.x_min) * self.plot_width

    def map_y(self, value: float) -> float:
        return self.margin + (self.y_max - value) / (self.y_max - self.y_min) * self.plot_height


def _num(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def _line(x1: float, y1: float, x2: float, y2: float, stroke: str, width: int = 1) -> str:
    return (
        f'<line x1="{_num(x1)}" y1="{_num(y1)}" x2="{_num(x2)}" y2="{_num(y2)}" '
        f'stroke="{stroke}" stroke-width="{width}"/>'
    )


def _text(x: float, y: float, body: str, size: int, anchor: str = "middle", extra: str = "") -> str:
    return (
        f'<text x="{_num(x)}" y="{_num(y)}" text-anchor="{anchor}" font-size="{size}" {FONT}{extra}>'
        f"{escape(body)}</text>"
    )


def _frame(spec: PlotSpec, canvas: Canvas) -> list[str]:
    width, height, margin = spec.width, spec.height, spec.margin
    parts = [
        f'<rect width="{_num(width)}" height="{_num(height)}" fill="white"/>',
        _text(width / 2.0, 30.0, spec.title, 20),
        _line(margin, margin, margin, height - margin, "black", 2),
        _line(margin, height - margin, width - margin, height - margin, "black", 2),
        _text(
            20.0,
            height / 2.0,
            spec.y_label,
            14,
            extra=f' transform="rotate(-90 20 {_num(height / 2.0)})"',
        ),
        _text(width / 2.0, height - 10.0, spec.x_label, 14),
    ]
    steps = GRID_TICKS - 1
    for i in range(GRID_TICKS):
        frac = i / steps
        x = margin + frac * canvas.plot_width
        x_val = canvas.x_min + frac * (canvas.x_max - canvas.x_min)
        parts.append(_line(x, margin, x, height - margin, "lightgray"))
        parts.append(_text(x, height - margin + 20.0, f"{x_val:.0f}", 12))
    for i in range(GRID_TICKS):
        frac = i / steps
        y = margin + frac * canvas.plot_height
        y_val = canvas.y_max - frac * (canvas.y_max - canvas.y_min)
        parts.append(_line(margin, y, width - margin, y, "lightgray"))
        parts.append(_text(margin - 10.0, y + 5.0, f"{y_val:.2f}", 12, anchor="end"))
    return parts


def _series_marks(series: Series, canvas: Canvas, color: str) -> list[str]:
    coords = [(canvas.map_x(x), canvas.map_y(y)) for x, y in series.points]
    path = "M " + " L ".join(f"{_num(x)} {_num(y)}" for x, y in coords)
    parts = [
        f'<path class="series" data-name={quoteattr(series.name)} d="{path}" '
        f'fill="none" stroke="{color}" stroke-width="2"/>'
    ]
    parts.extend(f'<circle cx="{_num(x)}" cy="{_num(y)}" r="3" fill="{color}"/>' for x, y in coords)
    return parts


def _legend_entry(name: str, color: str, spec: PlotSpec, legend_y: float) -> str:
    right = spec.width - spec.margin
    return (
        '<g class="legend-entry">'
        + _line(right - 100.0, legend_y, right - 80.0, legend_y, color, 2)
        + f'<text x="{_num(right - 75.0)}" y="{_num(legend_y + 4.0)}" font-size="12" {FONT}>'
        + f"{escape(name)}</text></g>"
    )


def render_svg(spec: PlotSpec, series: Mapping[str, Series]) -> str:
    """Render every non-empty series into one SVG document.

    Raises :class:`NoData` when no series has a point, since the y range
    would otherwise be undefined.
    """
    populated = [(name, s) for name, s in series.items() if len(s)]
    if not populated:
        raise NoData("No data points to plot", target=spec.title)
    ys = [y for _, s in populated for y in s.ys]
    if not all(math.isfinite(y) for y in ys):
        raise NoData("Series contain non-finite values", target=spec.title)

    canvas = Canvas.fit(spec, min(ys), max(ys))
    parts = [
        f'<svg width="{_num(spec.width)}" height="{_num(spec.height)}" '
        f'viewBox="0 0 {_num(spec.width)} {_num(spec.height)}" xmlns="http://www.w3.org/2000/svg">'
    ]
    parts.extend(_frame(spec, canvas))

    legend_y = 60.0
    for idx, (name, data) in enumerate(populated):
        color = PALETTE[idx % len(PALETTE)]
        parts.extend(_series_marks(data, canvas, color))
        parts.append(_legend_entry(name, color, spec, legend_y))
        legend_y += 20.0

    parts.append("</svg>")
    return "\n".join(parts) + "\n"


def write_svg(spec: PlotSpec, series: Mapping[str, Series], path: str | Path) -> Path:
    document = render_svg(spec, series)
    output_path = Path(path)
    try:
        output_path.write_text(document, encoding="utf-8")
    except OSError as exc:
        raise OutputUnavailable(f"Could not write plot: {exc}", target=output_path, phase="render") from exc
    return output_path
