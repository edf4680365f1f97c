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
Best-effort parsing of the comma/colon delimited strings passed in by the host.

Malformed tokens are dropped rather than reported, so garbage input simply
produces an empty result.
"""

import numpy as np
import pandas as pd


def split_tokens(text: str) -> pd.Series:
    """Split on commas, stripping whitespace and discarding empty segments."""
    tokens = pd.Series(text.split(","), dtype=object).str.strip()
    return tokens[tokens != ""].reset_index(drop=True)


def _coerce_float(token: str) -> float:
    try:
        return float(token)
    except ValueError:
        return np.nan


def _to_float(tokens: pd.Series) -> pd.Series:
    """Convert string tokens to floats; anything unparseable becomes NaN.

    Uses float() per token rather than pd.to_numeric, whose fast parser is
    not correctly rounded.
    """
    return tokens.map(_coerce_float).astype(float)


def empty_points() -> pd.DataFrame:
    return pd.DataFrame({"x": pd.Series(dtype=float), "y": pd.Series(dtype=float)})


def parse_values(text: str) -> pd.Series:
    """Parse "1,2,3" into a float Series, keeping input order and duplicates."""
    values = _to_float(split_tokens(text))
    return values[np.isfinite(values)].reset_index(drop=True)


def parse_pairs(text: str) -> pd.DataFrame:
    """Parse "x:y,x:y" into a DataFrame with float columns 'x' and 'y'.

    Each token is split at its first ':'. Tokens without a colon, or with
    either half failing to convert, are dropped as a whole.
    """
    tokens = split_tokens(text)
    if tokens.empty:
        return empty_points()

    parts = tokens.str.partition(":")
    paired = parts[parts[1] == ":"]
    points = pd.DataFrame({
        "x": _to_float(paired[0].str.strip()),
        "y": _to_float(paired[2].str.strip()),
    })
    finite = np.isfinite(points).all(axis=1)
    return points[finite].reset_index(drop=True)


def points_from_values(values: pd.Series) -> pd.DataFrame:
    """Lay flat values out as points, using each value's position as x."""
    return pd.DataFrame({
        "x": np.arange(len(values), dtype=float),
        "y": values.to_numpy(dtype=float),
    })
