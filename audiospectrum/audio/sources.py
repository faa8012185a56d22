"""Ready-made spectrum sources for fixed scenes and pre-rendered material."""

import logging
from pathlib import Path
from typing import Callable, Union

import numpy as np

from .base import FFTWindow, SpectrumSource, fill_buffer

logger = logging.getLogger(__name__)


class StaticSpectrumSource(SpectrumSource):
    """Returns the same magnitudes on every call."""

    def __init__(self, spectrum: np.ndarray, sample_rate: float = 44100):
        self._spectrum = np.asarray(spectrum, dtype=np.float32).ravel()
        self._sample_rate = float(sample_rate)

    @property
    def sample_rate(self) -> float:
        return self._sample_rate

    @property
    def spectrum(self) -> np.ndarray:
        return self._spectrum

    @spectrum.setter
    def spectrum(self, value: np.ndarray) -> None:
        self._spectrum = np.asarray(value, dtype=np.float32).ravel()

    def get_spectrum_data(self, buffer: np.ndarray, channel: int = 0,
                          window: FFTWindow = FFTWindow.BLACKMAN_HARRIS) -> None:
        fill_buffer(buffer, self._spectrum)


class FrameSequenceSource(SpectrumSource):
    """Replays pre-rendered magnitude frames, one row per call.

    Once the frames run out the source yields silence, or starts over when
    ``loop`` is set.
    """

    def __init__(self, frames: np.ndarray, sample_rate: float = 44100, loop: bool = False):
        frames = np.asarray(frames, dtype=np.float32)
        if frames.ndim == 1:
            frames = frames[np.newaxis, :]
        if frames.ndim != 2:
            raise ValueError(f"Expected a 2-D array of frames, got shape {frames.shape}")
        self._frames = frames
        self._sample_rate = float(sample_rate)
        self._loop = loop
        self._position = 0

    @classmethod
    def from_file(cls, path: Union[str, Path], sample_rate: float = 44100,
                  loop: bool = False) -> "FrameSequenceSource":
        """Load frames from a ``.npy`` file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Spectrum file not found: {path}")
        frames = np.load(path, allow_pickle=False)
        logger.info(f"Loaded {path.name}: {frames.shape[0] if frames.ndim > 1 else 1} frames")
        return cls(frames, sample_rate=sample_rate, loop=loop)

    @property
    def sample_rate(self) -> float:
        return self._sample_rate

    @property
    def frame_count(self) -> int:
        return self._frames.shape[0]

    @property
    def position(self) -> int:
        """Index of the next frame to be emitted."""
        return self._position

    @property
    def exhausted(self) -> bool:
        return not self._loop and self._position >= self.frame_count

    def get_spectrum_data(self, buffer: np.ndarray, channel: int = 0,
                          window: FFTWindow = FFTWindow.BLACKMAN_HARRIS) -> None:
        if self.frame_count == 0 or self.exhausted:
            buffer[:] = 0.0
            return
        if self._loop:
            self._position %= self.frame_count
        fill_buffer(buffer, self._frames[self._position])
        self._position += 1

    def rewind(self) -> None:
        self._position = 0


class CallbackSpectrumSource(SpectrumSource):
    """Adapts a callable that returns a magnitude array."""

    def __init__(self, callback: Callable[[], np.ndarray], sample_rate: float = 44100):
        self._callback = callback
        self._sample_rate = float(sample_rate)

    @property
    def sample_rate(self) -> float:
        return self._sample_rate

    def get_spectrum_data(self, buffer: np.ndarray, channel: int = 0,
                          window: FFTWindow = FFTWindow.BLACKMAN_HARRIS) -> None:
        fill_buffer(buffer, self._callback())
