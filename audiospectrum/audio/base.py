"""Base classes for raw spectrum sources."""

from abc import ABC, abstractmethod
from enum import Enum

import numpy as np


class FFTWindow(Enum):
    """Window function a source is asked to apply before its transform."""
    RECTANGULAR = "rectangular"
    TRIANGLE = "triangle"
    HAMMING = "hamming"
    HANNING = "hanning"
    BLACKMAN = "blackman"
    BLACKMAN_HARRIS = "blackmanharris"


class SpectrumSource(ABC):
    """Abstract provider of magnitude spectra.

    The analyzer owns the buffer; a source only fills it. Bin ``i`` of a buffer
    of length ``N`` covers frequency ``i * sample_rate / (2 * N)``.
    """

    @property
    @abstractmethod
    def sample_rate(self) -> float:
        """Output sample rate in Hz."""
        pass

    @abstractmethod
    def get_spectrum_data(self, buffer: np.ndarray, channel: int = 0,
                          window: FFTWindow = FFTWindow.BLACKMAN_HARRIS) -> None:
        """Write the current magnitudes into ``buffer`` in place."""
        pass


def fill_buffer(buffer: np.ndarray, data: np.ndarray) -> None:
    """Copy ``data`` into ``buffer``, truncating or zero-padding to the buffer length."""
    data = np.asarray(data, dtype=buffer.dtype).ravel()
    n = min(len(buffer), len(data))
    buffer[:n] = data[:n]
    if n < len(buffer):
        buffer[n:] = 0.0
