# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (C) 2024 Jonathan Lee
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License version 3
# as published by the Free Software Foundation.
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.
# See the GNU Affero General Public License for more details.
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see https://www.gnu.org/licenses/.

"""
SVG markup emission for line, bar, scatter and pie charts.

Coordinates are written with six decimals; non-finite values come out as
'inf' or 'nan' so a degenerate axis still yields a complete document.
"""

import sys
from typing import List, Optional
from xml.sax.saxutils import escape

import pandas as pd

from graph_config import (
    GraphConfig,
    PieConfig,
    PIE_CENTER,
    PIE_HEIGHT,
    PIE_RADIUS,
    PIE_WIDTH,
)
from graph_geometry import BoundingBox, ChartDataError, Scaler, pie_slices

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'
SVG_NAMESPACE = "http://www.w3.org/2000/svg"


def _num(value) -> str:
    return f"{float(value):f}"


def _svg_open(width: int, height: int, background: str) -> str:
    return (
        XML_DECLARATION
        + f'<svg xmlns="{SVG_NAMESPACE}" width="{width}" height="{height}">\n'
        + f'<rect width="100%" height="100%" fill="{background}"/>\n'
    )


class SVGGraph:
    """Builds one Cartesian chart document.

    Call exactly one of line_chart, bar_chart or scatter_plot, then
    get_svg() for the finished markup.
    """

    def __init__(self, config: Optional[GraphConfig] = None):
        self.config = config or GraphConfig()
        self.scaler: Optional[Scaler] = None
        self._parts: List[str] = []

    # --- Shared skeleton ---

    def _begin(self, box: BoundingBox, chart_name: str) -> None:
        if box.is_degenerate:
            print(
                f"WARNING: {chart_name} chart has a zero-width axis "
                f"(x: {box.min_x:g}..{box.max_x:g}, y: {box.min_y:g}..{box.max_y:g}); "
                "coordinates will be non-finite",
                file=sys.stderr,
            )
        self.scaler = Scaler(box, self.config)
        self._parts = [_svg_open(self.config.width, self.config.height, self.config.bg_color)]
        self._draw_grid()
        self._draw_axes()
        self._draw_labels()

    def _finish(self) -> None:
        self._parts.append("</svg>")

    def _draw_grid(self) -> None:
        cfg = self.config
        if not cfg.show_grid:
            return

        out = ['<g id="grid" stroke="#e5e7eb" stroke-width="1">\n']
        for i in range(11):
            x = cfg.padding + (cfg.chart_width * i) // 10
            out.append(f'<line x1="{x}" y1="{cfg.padding}" x2="{x}" y2="{cfg.height - cfg.padding}"/>\n')
        for i in range(11):
            y = cfg.padding + (cfg.chart_height * i) // 10
            out.append(f'<line x1="{cfg.padding}" y1="{y}" x2="{cfg.width - cfg.padding}" y2="{y}"/>\n')
        out.append("</g>\n")
        self._parts.extend(out)

    def _draw_axes(self) -> None:
        cfg = self.config
        left, right = cfg.padding, cfg.width - cfg.padding
        top, bottom = cfg.padding, cfg.height - cfg.padding
        self._parts.append(
            '<g id="axes" stroke="#1f2937" stroke-width="2">\n'
            f'<line x1="{left}" y1="{bottom}" x2="{right}" y2="{bottom}"/>\n'
            f'<line x1="{left}" y1="{top}" x2="{left}" y2="{bottom}"/>\n'
            "</g>\n"
        )

    def _draw_labels(self) -> None:
        cfg = self.config
        mid_x, mid_y = cfg.width // 2, cfg.height // 2
        self._parts.append(
            f'<text x="{mid_x}" y="30" text-anchor="middle" font-size="20" '
            f'font-weight="bold" fill="#1f2937">{escape(cfg.title)}</text>\n'
        )
        self._parts.append(
            f'<text x="{mid_x}" y="{cfg.height - 10}" text-anchor="middle" '
            f'font-size="14" fill="#4b5563">{escape(cfg.xlabel)}</text>\n'
        )
        self._parts.append(
            f'<text x="20" y="{mid_y}" text-anchor="middle" font-size="14" fill="#4b5563" '
            f'transform="rotate(-90 20 {mid_y})">{escape(cfg.ylabel)}</text>\n'
        )

    # --- Chart types ---

    def line_chart(self, points: pd.DataFrame) -> None:
        """Polyline through the points in input order, with a marker on each."""
        self._begin(BoundingBox.from_points(points).padded(0.05), "line")
        xs = self.scaler.scale_x(points["x"])
        ys = self.scaler.scale_y(points["y"])
        color = self.config.color

        coords = " ".join(f"{_num(x)},{_num(y)}" for x, y in zip(xs, ys))
        self._parts.append(f'<polyline points="{coords}" fill="none" stroke="{color}" stroke-width="2"/>\n')
        for x, y in zip(xs, ys):
            self._parts.append(f'<circle cx="{_num(x)}" cy="{_num(y)}" r="4" fill="{color}"/>\n')
        self._finish()

    def bar_chart(self, points: pd.DataFrame) -> None:
        """One bar per point in evenly spaced slots; x values are ignored."""
        self._begin(BoundingBox.for_bars(points), "bar")
        cfg = self.config
        count = len(points)
        bar_width = cfg.chart_width / (count * 1.5)
        heights = self.scaler.scale_height(points["y"])

        for i, (value, height) in enumerate(zip(points["y"], heights)):
            x = cfg.padding + (cfg.chart_width * (i + 0.5)) / count
            y = cfg.height - cfg.padding - height
            self._parts.append(
                f'<rect x="{_num(x - bar_width / 2)}" y="{_num(y)}" width="{_num(bar_width)}" '
                f'height="{_num(height)}" fill="{cfg.color}" opacity="0.8"/>\n'
            )
            self._parts.append(
                f'<text x="{_num(x)}" y="{_num(y - 5)}" text-anchor="middle" font-size="12" '
                f'fill="#1f2937">{int(value)}</text>\n'
            )
        self._finish()

    def scatter_plot(self, points: pd.DataFrame) -> None:
        """Unconnected semi-transparent dots."""
        self._begin(BoundingBox.from_points(points).padded(0.05), "scatter")
        xs = self.scaler.scale_x(points["x"])
        ys = self.scaler.scale_y(points["y"])
        for x, y in zip(xs, ys):
            self._parts.append(
                f'<circle cx="{_num(x)}" cy="{_num(y)}" r="5" fill="{self.config.color}" opacity="0.7"/>\n'
            )
        self._finish()

    def get_svg(self) -> str:
        return "".join(self._parts)


def render_pie_svg(values: pd.Series, config: Optional[PieConfig] = None) -> str:
    """Render a pie chart on the fixed 800x600 canvas."""
    config = config or PieConfig()
    if len(values) == 0:
        raise ChartDataError("Pie chart requires at least one value.")
    if not config.palette:
        raise ValueError("Pie palette must contain at least one color.")

    slices = pie_slices(values, PIE_CENTER, PIE_RADIUS)
    if any(s.sweep < 0 for s in slices):
        print("WARNING: pie chart contains negative values; their slices sweep backwards", file=sys.stderr)

    cx, cy = PIE_CENTER
    parts = [
        _svg_open(PIE_WIDTH, PIE_HEIGHT, "#ffffff"),
        f'<text x="{PIE_WIDTH // 2}" y="30" text-anchor="middle" font-size="20" '
        f'font-weight="bold">{escape(config.title)}</text>\n',
    ]
    for s in slices:
        (x1, y1), (x2, y2), (lx, ly) = s.start, s.end, s.label
        color = config.palette[s.index % len(config.palette)]
        parts.append(
            f'<path d="M {_num(cx)} {_num(cy)} L {_num(x1)} {_num(y1)} '
            f'A {_num(PIE_RADIUS)} {_num(PIE_RADIUS)} 0 {s.large_arc} 1 {_num(x2)} {_num(y2)} Z" '
            f'fill="{color}" stroke="white" stroke-width="2"/>\n'
        )
        parts.append(
            f'<text x="{_num(lx)}" y="{_num(ly)}" text-anchor="middle" font-size="14" '
            f'fill="white" font-weight="bold">{s.percent}%</text>\n'
        )
    parts.append("</svg>")
    return "".join(parts)
