import numpy as np


def paa_length(n: int, frame_size: int):
    return (n - 1) // frame_size + 1


def piecewise_aggregate(series, frame_size: int):
    """Mean of every ``frame_size`` consecutive points; the last frame may be shorter."""
    if frame_size < 1:
        raise ValueError(f"frame_size must be at least 1, got {frame_size}")

    series = np.asarray(series, dtype=float)

    aggregated = np.empty(paa_length(len(series), frame_size))
    for k, i in enumerate(range(0, len(series), frame_size)):
        aggregated[k] = np.mean(series[i:i + frame_size])

    return aggregated
