# Spectrum source boundary
from .base import FFTWindow, SpectrumSource
from .sources import CallbackSpectrumSource, FrameSequenceSource, StaticSpectrumSource

__all__ = [
    "FFTWindow",
    "SpectrumSource",
    "StaticSpectrumSource",
    "FrameSequenceSource",
    "CallbackSpectrumSource",
]
