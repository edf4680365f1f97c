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

"""Rendering configuration for the SVG graph helpers."""

from dataclasses import dataclass
from typing import Tuple

PIE_PALETTE: Tuple[str, ...] = (
    "#3b82f6",
    "#ef4444",
    "#10b981",
    "#f59e0b",
    "#8b5cf6",
    "#ec4899",
)

# Pie geometry is fixed; only the title and palette are configurable.
PIE_WIDTH = 800
PIE_HEIGHT = 600
PIE_CENTER = (400.0, 320.0)
PIE_RADIUS = 180.0


@dataclass(frozen=True)
class GraphConfig:
    """Canvas and style settings for the Cartesian charts (line, bar, scatter)."""

    width: int = 800
    height: int = 600
    padding: int = 60
    title: str = "Graph"
    xlabel: str = "X"
    ylabel: str = "Y"
    color: str = "#2563eb"
    bg_color: str = "#ffffff"
    show_grid: bool = True
    show_legend: bool = True  # not drawn yet

    @property
    def chart_width(self) -> int:
        return self.width - 2 * self.padding

    @property
    def chart_height(self) -> int:
        return self.height - 2 * self.padding


@dataclass(frozen=True)
class PieConfig:
    """Settings for the pie chart."""

    title: str = "Pie Chart"
    palette: Tuple[str, ...] = PIE_PALETTE
