"""
Shared pytest fixtures for audiospectrum tests.
"""
import numpy as np
import pytest

from audiospectrum.analysis.spectrum import AudioSpectrum
from audiospectrum.audio.sources import StaticSpectrumSource

SAMPLE_RATE = 44100
NUM_SAMPLES = 1024


def bin_for(frequency, num_samples=NUM_SAMPLES, sample_rate=SAMPLE_RATE):
    """Spectrum bin holding the given frequency."""
    return int(frequency / sample_rate * 2 * num_samples)


@pytest.fixture
def silent_source():
    """Source that always returns an all-zero spectrum."""
    return StaticSpectrumSource(np.zeros(NUM_SAMPLES, dtype=np.float32), SAMPLE_RATE)


@pytest.fixture
def analyzer(silent_source):
    """TenBand analyzer with 1024 samples at 44.1 kHz, fed silence."""
    return AudioSpectrum(silent_source, number_of_samples=NUM_SAMPLES, band_type="TenBand")


@pytest.fixture
def tone_spectrum():
    """Spectrum with all its energy in the 1000 Hz bin."""
    spectrum = np.zeros(NUM_SAMPLES, dtype=np.float32)
    spectrum[bin_for(1000)] = 0.5
    return spectrum
