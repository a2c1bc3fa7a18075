from __future__ import annotations

import numpy as np
import pytest

from hotsax import InvalidParametersError, euclidean, normalized_windows, paa, znorm


def test_znorm_has_zero_mean_and_unit_variance() -> None:
    z = znorm([1.0, 2.0, 3.0, 4.0, 10.0])
    assert z.mean() == pytest.approx(0.0, abs=1e-12)
    assert z.std() == pytest.approx(1.0)


def test_znorm_is_idempotent_on_its_output() -> None:
    rng = np.random.default_rng(3)
    window = rng.normal(5.0, 2.0, size=40)
    once = znorm(window)
    twice = znorm(once)
    np.testing.assert_allclose(twice, once, atol=1e-12)


def test_znorm_constant_window_is_all_zeros() -> None:
    z = znorm([4.2] * 7)
    assert z.shape == (7,)
    assert np.all(z == 0.0)


@pytest.mark.parametrize("level", [1e6 + 0.1, 1e10 + 0.3, -3.5e8])
def test_znorm_constant_window_at_any_level_is_all_zeros(level: float) -> None:
    assert np.all(znorm([level] * 7) == 0.0)
    assert np.all(normalized_windows(np.full(40, level), 6) == 0.0)


def test_znorm_keeps_tiny_amplitude_shape() -> None:
    window = np.array([1.0, 2.0, 3.0, 7.0])
    np.testing.assert_allclose(znorm(window * 1e-12), znorm(window), rtol=1e-9)
    np.testing.assert_allclose(normalized_windows(window * 1e-12, 4)[0], znorm(window), rtol=1e-9)


def test_paa_preserves_mean_when_segments_are_even() -> None:
    window = znorm(np.sin(np.linspace(0, 3, 24)) + np.linspace(0, 1, 24))
    reduced = paa(window, 6)
    assert reduced.size == 6
    assert reduced.mean() == pytest.approx(window.mean(), abs=1e-12)


def test_paa_gives_extra_samples_to_leading_segments() -> None:
    reduced = paa([1.0, 2.0, 3.0, 4.0, 5.0], 2)
    np.testing.assert_allclose(reduced, [2.0, 4.5])


def test_paa_with_word_size_equal_to_length_is_identity() -> None:
    np.testing.assert_allclose(paa([3.0, -1.0, 2.0], 3), [3.0, -1.0, 2.0])


@pytest.mark.parametrize("word_size", [0, 6])
def test_paa_rejects_bad_word_sizes(word_size: int) -> None:
    with pytest.raises(InvalidParametersError):
        paa([1.0, 2.0, 3.0, 4.0, 5.0], word_size)


def test_normalized_windows_match_znorm_per_row() -> None:
    series = np.array([0.0, 1.0, 3.0, 3.0, 3.0, 3.0, 2.0, -1.0, 5.0])
    windows = normalized_windows(series, 4)
    assert windows.shape == (6, 4)
    for start, row in enumerate(windows):
        np.testing.assert_allclose(row, znorm(series[start : start + 4]), atol=1e-12)
    # row 2 covers a flat stretch
    assert np.all(windows[2] == 0.0)


def test_euclidean_distance() -> None:
    assert euclidean(np.array([0.0, 0.0]), np.array([3.0, 4.0])) == pytest.approx(5.0)


def test_euclidean_measures_each_row_of_a_batch() -> None:
    rows = np.array([[3.0, 4.0], [0.0, 0.0], [1.0, 0.0]])
    np.testing.assert_allclose(euclidean(rows, np.zeros(2)), [5.0, 0.0, 1.0])
