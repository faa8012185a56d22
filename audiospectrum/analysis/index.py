"""Frequency to spectrum-bin mapping."""

import math


def frequency_to_spectrum_index(frequency: float, num_samples: int, sample_rate: float) -> int:
    """
    Map a frequency onto an index of a raw magnitude spectrum.

    The spectrum spans 0 .. sample_rate / 2 over ``num_samples`` bins, so the
    mapping is linear. The result is always a valid index.

    Args:
        frequency: Frequency in Hz
        num_samples: Length of the spectrum buffer
        sample_rate: Output sample rate in Hz

    Returns:
        floor(frequency / sample_rate * 2 * num_samples), clamped to [0, num_samples - 1]
    """
    last = num_samples - 1
    if sample_rate <= 0 or last <= 0:
        return 0
    position = frequency / sample_rate * 2.0 * num_samples
    if math.isnan(position) or position <= 0:
        return 0
    if position >= last:
        return last
    return int(math.floor(position))


def band_index_range(center: float, bandwidth: float,
                     num_samples: int, sample_rate: float) -> tuple[int, int]:
    """Inclusive (imin, imax) spectrum indices covered by a band."""
    imin = frequency_to_spectrum_index(center / bandwidth, num_samples, sample_rate)
    imax = frequency_to_spectrum_index(center * bandwidth, num_samples, sample_rate)
    return imin, imax
