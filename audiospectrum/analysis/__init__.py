# Band analysis module
from .amplitude import AmplitudeEstimator
from .bands import BAND_LAYOUTS, BandLayout, BandType, get_layout, parse_band_type
from .index import band_index_range, frequency_to_spectrum_index
from .spectrum import AudioSpectrum, SpectrumFrame, StructuralReset

__all__ = [
    "AmplitudeEstimator",
    "AudioSpectrum",
    "BAND_LAYOUTS",
    "BandLayout",
    "BandType",
    "SpectrumFrame",
    "StructuralReset",
    "band_index_range",
    "frequency_to_spectrum_index",
    "get_layout",
    "parse_band_type",
]
