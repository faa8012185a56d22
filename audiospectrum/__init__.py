"""Band levels, peaks and amplitude from a raw magnitude spectrum, for audio visualizers."""

from .analysis import AudioSpectrum, BandType, SpectrumFrame, StructuralReset
from .audio import FFTWindow, SpectrumSource

__version__ = "1.0.0"

__all__ = [
    "AudioSpectrum",
    "BandType",
    "FFTWindow",
    "SpectrumFrame",
    "SpectrumSource",
    "StructuralReset",
]
