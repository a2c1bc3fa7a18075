"""Symbolic Aggregate approXimation (SAX) of time-series windows."""

from __future__ import annotations

import string
from functools import lru_cache
from typing import List, Sequence

import numpy as np
from scipy.stats import norm

from .errors import InvalidParametersError
from .transforms import paa, znorm

ALPHABET = string.ascii_lowercase
MAX_ALPHABET_SIZE = len(ALPHABET)


@lru_cache(maxsize=None)
def _breakpoints(alphabet_size: int) -> tuple[float, ...]:
    quantiles = np.arange(1, alphabet_size) / alphabet_size
    return tuple(float(b) for b in norm.ppf(quantiles))


def gaussian_breakpoints(alphabet_size: int) -> tuple[float, ...]:
    """Return the ``alphabet_size - 1`` cut points splitting N(0, 1) into equiprobable regions.

    Tables are cached per alphabet size and are immutable, so they can be
    shared freely between searches.
    """

    if alphabet_size < 2:
        raise InvalidParametersError(f"alphabet_size must be >= 2 (got {alphabet_size})")
    return _breakpoints(int(alphabet_size))


def _check_alphabet(alphabet_size: int) -> None:
    if not 2 <= alphabet_size <= MAX_ALPHABET_SIZE:
        raise InvalidParametersError(
            f"alphabet_size must be between 2 and {MAX_ALPHABET_SIZE} (got {alphabet_size})"
        )


def symbols_for(values: Sequence[float] | np.ndarray, breakpoints: Sequence[float]) -> str:
    """Map aggregate values onto letters using ascending ``breakpoints``.

    A value equal to a breakpoint falls into the upper region.
    """

    indexes = np.searchsorted(np.asarray(breakpoints, dtype=float), np.asarray(values, dtype=float), side="right")
    return "".join(ALPHABET[i] for i in indexes)


def sax_word(
    window: Sequence[float] | np.ndarray,
    word_size: int,
    alphabet_size: int,
    breakpoints: Sequence[float] | None = None,
) -> str:
    """Discretize a window into a SAX word of ``word_size`` letters."""

    _check_alphabet(alphabet_size)
    if breakpoints is None:
        breakpoints = gaussian_breakpoints(alphabet_size)
    elif len(breakpoints) != alphabet_size - 1:
        raise InvalidParametersError(
            f"expected {alphabet_size - 1} breakpoints for alphabet_size {alphabet_size} (got {len(breakpoints)})"
        )
    return symbols_for(paa(znorm(window), word_size), breakpoints)


def symbolize_series(
    series: Sequence[float] | np.ndarray,
    window_len: int,
    word_size: int,
    alphabet_size: int,
) -> List[str]:
    """Return the SAX word of every window, indexed by start position."""

    arr = np.asarray(series, dtype=float)
    if window_len < 1 or window_len > arr.size:
        return []
    breakpoints = gaussian_breakpoints(alphabet_size)
    return [
        sax_word(arr[start : start + window_len], word_size, alphabet_size, breakpoints)
        for start in range(arr.size - window_len + 1)
    ]
