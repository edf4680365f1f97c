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
Host-facing graph functions: line, bar, scatter and pie.

Each takes a data string and an optional title, renders an SVG document,
writes it to a fixed file name and opens it. Every failure is reported
to the host as False; diagnostics go to stderr.
"""

import dataclasses
import sys
import traceback
from typing import Any, Callable, Dict, List, Optional, Union

import numpy as np
import pandas as pd

from graph_config import GraphConfig, PieConfig
from graph_geometry import BoundingBox, ChartDataError
from graph_parsing import parse_pairs, parse_values, points_from_values, split_tokens
from graph_renderer import SVGGraph, render_pie_svg
from graph_sink import FileSink

ChartConfig = Union[GraphConfig, PieConfig]

CHART_OUTPUT_FILES: Dict[str, str] = {
    'line': 'graph_line.svg',
    'bar': 'graph_bar.svg',
    'scatter': 'graph_scatter.svg',
    'pie': 'graph_pie.svg',
}

# --- Data preparation per chart type ---

def _line_points(data: str) -> pd.DataFrame:
    return parse_pairs(data)

def _bar_points(data: str) -> pd.DataFrame:
    """Pairs when the string contains ':', otherwise positional values."""
    if ':' in data:
        return parse_pairs(data)
    return points_from_values(parse_values(data))

def _pie_values(data: str) -> pd.Series:
    return parse_values(data)

CHART_PARSERS: Dict[str, Callable[[str], Union[pd.DataFrame, pd.Series]]] = {
    'line': _line_points,
    'bar': _bar_points,
    'scatter': _line_points,
    'pie': _pie_values,
}

# --- Renderers ---

def _render_cartesian(method: str) -> Callable[[pd.DataFrame, GraphConfig], str]:
    def render(points: pd.DataFrame, config: GraphConfig) -> str:
        graph = SVGGraph(config)
        getattr(graph, method)(points)
        return graph.get_svg()
    render.__name__ = f"_render_{method}"
    return render

CHART_RENDERERS: Dict[str, Callable[[Any, Any], str]] = {
    'line': _render_cartesian('line_chart'),
    'bar': _render_cartesian('bar_chart'),
    'scatter': _render_cartesian('scatter_plot'),
    'pie': render_pie_svg,
}

def _default_config(chart_name: str) -> ChartConfig:
    return PieConfig() if chart_name == 'pie' else GraphConfig()

def _resolve_config(chart_name: str, title: Any, config: Optional[ChartConfig]) -> ChartConfig:
    """Apply the host-supplied title, ignoring it unless it is a string."""
    config = config or _default_config(chart_name)
    if isinstance(title, str):
        config = dataclasses.replace(config, title=title)
    return config

# --- Core Logic & Public API ---

def render_chart(chart_name: str, data: str, title: Optional[str] = None,
                 config: Optional[ChartConfig] = None) -> str:
    """Render a chart to SVG markup without touching the filesystem."""
    if chart_name not in CHART_RENDERERS:
        raise ValueError(f"Unknown chart type '{chart_name}'. Available: {get_available_charts()}")
    if not isinstance(data, str):
        raise ChartDataError(f"Chart data must be a string, got {type(data).__name__}")

    parsed = CHART_PARSERS[chart_name](data)
    if len(parsed) == 0:
        raise ChartDataError(f"No valid numeric data found for {chart_name} chart.")

    print(f"DEBUG: rendering {chart_name} chart from {len(parsed)} values", file=sys.stderr)
    return CHART_RENDERERS[chart_name](parsed, _resolve_config(chart_name, title, config))

def _publish(chart_name: str, data: Any, title: Any, sink: Optional[FileSink],
             config: Optional[ChartConfig]) -> bool:
    try:
        svg = render_chart(chart_name, data, title, config)
        sink = sink or FileSink()
        return sink.publish(CHART_OUTPUT_FILES[chart_name], svg)
    except ChartDataError as e:
        print(f"Error in {chart_name}: {e}", file=sys.stderr)
        return False
    except Exception as e:
        print(f"Error in {chart_name}: {str(e)}", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
        return False

def line(data: Any = None, title: Any = None, *, sink: Optional[FileSink] = None,
         config: Optional[GraphConfig] = None) -> bool:
    """Line chart from "x:y,x:y,..." written to graph_line.svg."""
    return _publish('line', data, title, sink, config)

def bar(data: Any = None, title: Any = None, *, sink: Optional[FileSink] = None,
        config: Optional[GraphConfig] = None) -> bool:
    """Bar chart from "v,v,..." or "x:y,..." written to graph_bar.svg."""
    return _publish('bar', data, title, sink, config)

def scatter(data: Any = None, title: Any = None, *, sink: Optional[FileSink] = None,
            config: Optional[GraphConfig] = None) -> bool:
    """Scatter plot from "x:y,x:y,..." written to graph_scatter.svg."""
    return _publish('scatter', data, title, sink, config)

def pie(data: Any = None, title: Any = None, *, sink: Optional[FileSink] = None,
        config: Optional[PieConfig] = None) -> bool:
    """Pie chart from "v,v,..." written to graph_pie.svg."""
    return _publish('pie', data, title, sink, config)

def get_available_charts() -> List[str]:
    """Returns a list of all available chart types."""
    return sorted(CHART_RENDERERS)

def validate_chart_data(chart_name: str, data: Any) -> Dict[str, Any]:
    """Checks whether the data string will produce a usable chart."""
    errors: List[str] = []
    warnings: List[str] = []

    if chart_name not in CHART_PARSERS:
        errors.append(f"Unknown chart type '{chart_name}'")
    elif not isinstance(data, str):
        errors.append(f"Chart data must be a string, got {type(data).__name__}")
    else:
        parsed = CHART_PARSERS[chart_name](data)
        token_count = len(split_tokens(data))
        skipped = token_count - len(parsed)
        if skipped > 0:
            warnings.append(f"{skipped} of {token_count} tokens could not be parsed and will be skipped")

        if len(parsed) == 0:
            errors.append(f"No valid numeric data found for {chart_name} chart")
        elif chart_name == 'pie':
            if parsed.sum() <= 0:
                errors.append("Pie chart requires values with a positive total")
            elif (parsed < 0).any():
                warnings.append("Pie chart has negative values; their slices will sweep backwards")
        else:
            box = BoundingBox.for_bars(parsed) if chart_name == 'bar' else BoundingBox.from_points(parsed)
            if box.is_degenerate:
                warnings.append(f"{chart_name} chart has a zero-width axis; coordinates will be non-finite")

    return {
        'valid': len(errors) == 0,
        'errors': errors,
        'warnings': warnings,
    }

def create_sample_data(chart_type: str) -> str:
    """Create sample data strings for testing different chart types."""
    if chart_type in ('line', 'scatter'):
        xs = np.arange(1, 9)
        ys = xs ** 2 if chart_type == 'line' else (xs * 7) % 11
        return ",".join(f"{x}:{y}" for x, y in zip(xs, ys))
    elif chart_type == 'bar':
        return "10,20,15,30,25"
    elif chart_type == 'pie':
        return "35,25,20,15,5"
    else:
        return "1:10,2:15,3:13,4:17,5:20"

if __name__ == "__main__":
    print("SVG Graph Module")
    print("For comprehensive testing, run: python run_tests.py")
    print(f"Available charts: {get_available_charts()}")

    try:
        svg = render_chart('scatter', create_sample_data('scatter'))
        print(f"✅ Basic functionality test passed ({len(svg)} bytes of SVG)")
    except Exception as e:
        print(f"❌ Basic functionality test failed: {e}")
