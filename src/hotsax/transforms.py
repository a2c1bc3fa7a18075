"""Window normalization, piecewise aggregation and distances."""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .errors import InvalidParametersError


def znorm(window: Sequence[float] | np.ndarray) -> np.ndarray:
    """Z-normalize a window to zero mean and unit (population) variance.

    A constant window (every sample equal, at any level) has no shape to
    compare, so it normalizes to all zeros instead of dividing by a zero
    standard deviation. Any real variation is kept, however small.
    """

    arr = np.asarray(window, dtype=float)
    if arr.size == 0:
        return arr.copy()
    std = float(np.std(arr))
    if np.ptp(arr) == 0 or std == 0:
        return np.zeros_like(arr)
    return (arr - float(np.mean(arr))) / std


def paa(window: Sequence[float] | np.ndarray, word_size: int) -> np.ndarray:
    """Piecewise aggregate approximation: the mean of ``word_size`` segments.

    When the window length is not a multiple of ``word_size`` the leading
    segments are one sample longer than the trailing ones.
    """

    arr = np.asarray(window, dtype=float)
    if word_size < 1:
        raise InvalidParametersError(f"word_size must be >= 1 (got {word_size})")
    if word_size > arr.size:
        raise InvalidParametersError(
            f"word_size ({word_size}) cannot exceed the window length ({arr.size})"
        )
    return np.array([segment.mean() for segment in np.array_split(arr, word_size)])


def euclidean(a: np.ndarray, b: np.ndarray) -> float | np.ndarray:
    """Euclidean distance; each row of a 2-D ``a`` is measured against ``b`` separately."""

    diff = np.asarray(a, dtype=float) - np.asarray(b, dtype=float)
    if diff.ndim == 1:
        return float(np.linalg.norm(diff))
    return np.linalg.norm(diff, axis=-1)


def normalized_windows(series: np.ndarray, window_len: int) -> np.ndarray:
    """Return a ``(len(series) - window_len + 1, window_len)`` matrix of z-normalized windows.

    Row ``i`` equals ``znorm(series[i : i + window_len])``.
    """

    windows = sliding_window_view(np.asarray(series, dtype=float), window_len)
    means = windows.mean(axis=1, keepdims=True)
    stds = windows.std(axis=1, keepdims=True)
    flat = (np.ptp(windows, axis=1, keepdims=True) == 0) | (stds == 0)
    normalized = (windows - means) / np.where(flat, 1.0, stds)
    normalized[flat[:, 0]] = 0.0
    return normalized
