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

"""Tests for bounding boxes, scaling and pie slice layout."""

import math

import pandas as pd
import pytest

from graph_config import GraphConfig
from graph_geometry import BoundingBox, ChartDataError, Scaler, pie_slices
from graph_parsing import parse_pairs, parse_values, points_from_values


def test_bounding_box_from_points():
    box = BoundingBox.from_points(parse_pairs("0:5,10:-5,4:1"))
    assert box == BoundingBox(min_x=0.0, max_x=10.0, min_y=-5.0, max_y=5.0)


def test_padded_box_grows_five_percent_each_side():
    box = BoundingBox(0.0, 10.0, -5.0, 5.0).padded(0.05)
    assert box.min_x == pytest.approx(-0.5)
    assert box.max_x == pytest.approx(10.5)
    assert box.min_y == pytest.approx(-5.5)
    assert box.max_y == pytest.approx(5.5)


def test_padding_a_zero_range_is_a_no_op():
    box = BoundingBox(3.0, 3.0, 1.0, 2.0)
    padded = box.padded(0.05)
    assert (padded.min_x, padded.max_x) == (3.0, 3.0)
    assert padded.is_degenerate


def test_bar_box_uses_slot_count_and_headroom():
    box = BoundingBox.for_bars(points_from_values(parse_values("10,20,30")))
    assert (box.min_x, box.max_x, box.min_y) == (0.0, 3.0, 0.0)
    assert box.max_y == pytest.approx(33.0)


def test_empty_points_raise():
    with pytest.raises(ChartDataError):
        BoundingBox.from_points(parse_pairs(""))
    with pytest.raises(ChartDataError):
        BoundingBox.for_bars(parse_pairs(""))


def test_scaler_maps_box_corners_to_plot_area():
    cfg = GraphConfig()
    scaler = Scaler(BoundingBox(0.0, 10.0, 0.0, 100.0), cfg)
    assert scaler.scale_x(0.0) == pytest.approx(cfg.padding)
    assert scaler.scale_x(10.0) == pytest.approx(cfg.width - cfg.padding)
    assert scaler.scale_y(0.0) == pytest.approx(cfg.height - cfg.padding)
    assert scaler.scale_y(100.0) == pytest.approx(cfg.padding)
    assert scaler.scale_x(5.0) == pytest.approx(cfg.padding + cfg.chart_width / 2)


def test_scaler_is_monotonic():
    scaler = Scaler(BoundingBox(-3.0, 7.0, 0.0, 1.0), GraphConfig(width=640, padding=40))
    xs = [-3.0, -1.5, 0.0, 0.1, 4.0, 7.0, 9.0]
    scaled = [scaler.scale_x(x) for x in xs]
    assert scaled == sorted(scaled)


def test_scaler_accepts_series():
    scaler = Scaler(BoundingBox(0.0, 2.0, 0.0, 2.0), GraphConfig())
    scaled = scaler.scale_x(pd.Series([0.0, 1.0, 2.0]))
    assert scaled.tolist() == pytest.approx([60.0, 400.0, 740.0])


def test_degenerate_axis_gives_nan_instead_of_raising():
    scaler = Scaler(BoundingBox(1.0, 1.0, 2.0, 2.0), GraphConfig())
    assert math.isnan(scaler.scale_x(1.0))
    assert math.isinf(scaler.scale_y(3.0))


def test_pie_sweeps_sum_to_full_circle():
    for text in ["1", "50,50", "1,2,3,4,5,6,7", "0.1,1000,3.3"]:
        slices = pie_slices(parse_values(text), (400.0, 320.0), 180.0)
        assert sum(s.sweep for s in slices) == pytest.approx(360.0)


def test_pie_slices_start_at_twelve_oclock_and_chain():
    slices = pie_slices(parse_values("1,1,2"), (400.0, 320.0), 180.0)
    assert slices[0].start_angle == pytest.approx(-90.0)
    assert slices[0].start == pytest.approx((400.0, 140.0))
    for prev, cur in zip(slices, slices[1:]):
        assert cur.start_angle == pytest.approx(prev.end_angle)
    assert slices[-1].end_angle == pytest.approx(270.0)


def test_large_arc_only_above_half_circle():
    halves = pie_slices(parse_values("50,50"), (0.0, 0.0), 1.0)
    assert [s.sweep for s in halves] == pytest.approx([180.0, 180.0])
    assert [s.large_arc for s in halves] == [0, 0]

    skewed = pie_slices(parse_values("3,1"), (0.0, 0.0), 1.0)
    assert [s.large_arc for s in skewed] == [1, 0]


def test_pie_labels_sit_at_seventy_percent_radius():
    (only,) = pie_slices(parse_values("4,4,4,4")[:1], (0.0, 0.0), 100.0)
    lx, ly = only.label
    assert math.hypot(lx, ly) == pytest.approx(70.0)


def test_pie_percent_is_truncated():
    slices = pie_slices(parse_values("1,1,1"), (0.0, 0.0), 1.0)
    assert [s.percent for s in slices] == [33, 33, 33]


@pytest.mark.parametrize("text", ["0,0", "-1,-2", "5,-5"])
def test_pie_rejects_non_positive_total(text):
    with pytest.raises(ChartDataError):
        pie_slices(parse_values(text), (0.0, 0.0), 1.0)
