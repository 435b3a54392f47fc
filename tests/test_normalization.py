import numpy as np
import pytest
from numpy.testing import assert_allclose

from msax.normalization import RollingWindow, sliding_window_normalize


def _reference_normalize(x, window_size):
    # statistics of the window each point is normalized against, recomputed from slices
    n = len(x)
    lag = (window_size + 1) // 2
    out = np.empty(n)

    first = x[:window_size]
    for j in range(window_size // 2):
        out[j] = (x[j] - first.mean()) / first.std(ddof=1)
    for i in range(window_size, n):
        win = x[i - window_size + 1:i + 1]
        out[i - lag] = (x[i - lag] - win.mean()) / win.std(ddof=1)
    last = x[n - window_size:]
    for j in range(n - lag, n):
        out[j] = (x[j] - last.mean()) / last.std(ddof=1)

    return out


def test_rolling_window_keeps_last_values():
    window = RollingWindow(3)
    for v in [1, 2, 3, 4, 5]:
        window.push(v)

    assert len(window) == 3
    assert window.mean() == pytest.approx(4.0)
    assert window.variance() == pytest.approx(1.0)
    assert window.std() == pytest.approx(1.0)


def test_rolling_window_partial():
    window = RollingWindow(10)
    window.push(2.0)
    assert window.mean() == 2.0
    assert window.variance() == 0.0

    window.push(4.0)
    assert window.mean() == pytest.approx(3.0)
    assert window.variance() == pytest.approx(2.0)


def test_rolling_window_errors():
    with pytest.raises(ValueError):
        RollingWindow(0)
    with pytest.raises(ValueError):
        RollingWindow(3).mean()


def test_single_window():
    x = np.arange(1, 11, dtype=float)
    normalized = sliding_window_normalize(x, 10)

    assert_allclose(normalized, (x - 5.5) / np.std(x, ddof=1))


def test_geometric_series_even_window():
    normalized = sliding_window_normalize([1, 2, 4, 8, 16, 32], 2)

    h = np.sqrt(0.5)
    assert_allclose(normalized, [-h, -h, -h, -h, -h, h])


@pytest.mark.parametrize("window_size", [2, 3, 4, 7, 10, 25, 50])
def test_matches_window_slices(window_size):
    rng = np.random.default_rng(window_size)
    x = rng.normal(size=50).cumsum()

    normalized = sliding_window_normalize(x, window_size)

    assert normalized.shape == x.shape
    assert_allclose(normalized, _reference_normalize(x, window_size), rtol=1e-8, atol=1e-10)


def test_window_of_one_is_degenerate():
    with pytest.warns(RuntimeWarning):
        normalized = sliding_window_normalize([1.0, 2.0, 3.0], 1)

    assert normalized[0] == -np.inf
    assert normalized[1] == -np.inf
    assert np.isnan(normalized[2])


def test_constant_tail_is_not_finite():
    x = [1, 2, 3, 4] + [5] * 8
    with pytest.warns(RuntimeWarning):
        normalized = sliding_window_normalize(x, 4)

    assert np.all(np.isfinite(normalized[:5]))
    assert np.all(np.isnan(normalized[5:]))


def test_window_larger_than_series():
    with pytest.raises(ValueError):
        sliding_window_normalize([1.0, 2.0, 3.0], 4)
    with pytest.raises(ValueError):
        sliding_window_normalize([1.0, 2.0, 3.0], 0)


def test_rolling_window_follows_slices():
    x = np.random.default_rng(11).normal(size=2000).cumsum()
    window = RollingWindow(7)

    for i, v in enumerate(x):
        window.push(v)
        held = x[max(0, i - 6):i + 1]
        assert window.mean() == pytest.approx(held.mean(), rel=1e-7, abs=1e-9)
        if len(held) > 1:
            assert window.variance() == pytest.approx(held.var(ddof=1), rel=1e-7, abs=1e-9)


def test_rolling_window_constant_is_exact():
    window = RollingWindow(3)
    for v in [1.0, 2.0, 3.0, 0.1, 0.1, 0.1]:
        window.push(v)

    assert window.mean() == 0.1
    assert window.variance() == 0.0


def test_long_series_matches_window_slices():
    x = np.random.default_rng(2).normal(size=5000).cumsum()

    assert_allclose(sliding_window_normalize(x, 100), _reference_normalize(x, 100), rtol=1e-8, atol=1e-10)
