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
Coordinate scaling and pie geometry shared by the SVG renderers.

Division follows IEEE float rules: a zero-width axis yields inf/nan
coordinates instead of raising.
"""

from dataclasses import dataclass, replace
from typing import List, Tuple, Union

import numpy as np
import pandas as pd

from graph_config import GraphConfig

Number = Union[float, np.floating, pd.Series]


class ChartDataError(ValueError):
    """Raised when input data cannot produce a chart."""


def _ratio(numerator: Number, denominator: float) -> Number:
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.divide(numerator, denominator)


# --- Cartesian bounds and scaling ---

@dataclass(frozen=True)
class BoundingBox:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @classmethod
    def from_points(cls, points: pd.DataFrame) -> "BoundingBox":
        """Smallest box containing every point."""
        if points.empty:
            raise ChartDataError("Cannot compute bounds of an empty point set.")
        return cls(
            min_x=float(points["x"].min()),
            max_x=float(points["x"].max()),
            min_y=float(points["y"].min()),
            max_y=float(points["y"].max()),
        )

    @classmethod
    def for_bars(cls, points: pd.DataFrame) -> "BoundingBox":
        """Bar layout: x spans the slot count, y runs from 0 to 110% of the max."""
        if points.empty:
            raise ChartDataError("Cannot compute bounds of an empty point set.")
        return cls(
            min_x=0.0,
            max_x=float(len(points)),
            min_y=0.0,
            max_y=float(points["y"].max()) * 1.1,
        )

    @property
    def x_range(self) -> float:
        return self.max_x - self.min_x

    @property
    def y_range(self) -> float:
        return self.max_y - self.min_y

    @property
    def is_degenerate(self) -> bool:
        return self.x_range == 0 or self.y_range == 0

    def padded(self, fraction: float = 0.05) -> "BoundingBox":
        """Grow each axis by `fraction` of its range at both ends."""
        dx = self.x_range * fraction
        dy = self.y_range * fraction
        return replace(
            self,
            min_x=self.min_x - dx,
            max_x=self.max_x + dx,
            min_y=self.min_y - dy,
            max_y=self.max_y + dy,
        )


class Scaler:
    """Maps data coordinates onto the padded plotting area of a canvas."""

    def __init__(self, box: BoundingBox, config: GraphConfig):
        self.box = box
        self.left = config.padding
        self.bottom = config.height - config.padding
        self.inner_width = config.chart_width
        self.inner_height = config.chart_height

    def scale_x(self, x: Number) -> Number:
        return self.left + _ratio(x - self.box.min_x, self.box.x_range) * self.inner_width

    def scale_y(self, y: Number) -> Number:
        # Canvas y grows downwards.
        return self.bottom - self.scale_height(y)

    def scale_height(self, y: Number) -> Number:
        """Pixel distance of `y` above the bottom edge of the plotting area."""
        return _ratio(y - self.box.min_y, self.box.y_range) * self.inner_height


# --- Pie geometry ---

@dataclass(frozen=True)
class PieSlice:
    index: int
    value: float
    start_angle: float
    sweep: float
    start: Tuple[float, float]
    end: Tuple[float, float]
    label: Tuple[float, float]
    percent: int

    @property
    def end_angle(self) -> float:
        return self.start_angle + self.sweep

    @property
    def large_arc(self) -> int:
        return 1 if self.sweep > 180 else 0


def pie_slices(
    values: pd.Series,
    center: Tuple[float, float],
    radius: float,
    start_angle: float = -90.0,
    label_ratio: float = 0.7,
) -> List[PieSlice]:
    """Lay out clockwise slices starting at `start_angle` degrees (12 o'clock by default)."""
    values = pd.Series(values, dtype=float).reset_index(drop=True)
    total = float(values.sum())
    if total <= 0:
        raise ChartDataError(f"Pie chart needs a positive total, got {total:g}.")

    cx, cy = center
    sweeps = values / total * 360
    starts = start_angle + sweeps.cumsum() - sweeps
    ends = starts + sweeps
    mids = starts + sweeps / 2

    start_rad, end_rad, mid_rad = np.radians(starts), np.radians(ends), np.radians(mids)
    label_radius = radius * label_ratio

    slices = []
    for i, value in enumerate(values):
        slices.append(PieSlice(
            index=i,
            value=float(value),
            start_angle=float(starts[i]),
            sweep=float(sweeps[i]),
            start=(cx + radius * np.cos(start_rad[i]), cy + radius * np.sin(start_rad[i])),
            end=(cx + radius * np.cos(end_rad[i]), cy + radius * np.sin(end_rad[i])),
            label=(cx + label_radius * np.cos(mid_rad[i]), cy + label_radius * np.sin(mid_rad[i])),
            percent=int(value / total * 100),
        ))
    return slices
