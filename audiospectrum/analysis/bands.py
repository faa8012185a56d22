"""Fixed band layouts (center frequencies and bandwidth ratio per preset)."""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union


class BandType(Enum):
    """Band-count presets."""
    FOUR_BAND = "FourBand"
    FOUR_BAND_VISUAL = "FourBandVisual"
    EIGHT_BAND = "EightBand"
    TEN_BAND = "TenBand"
    TWENTY_SIX_BAND = "TwentySixBand"
    THIRTY_ONE_BAND = "ThirtyOneBand"


@dataclass(frozen=True)
class BandLayout:
    """Center frequencies (Hz, ascending) and the half-width ratio shared by all bands.

    A band with center ``c`` covers ``c / bandwidth`` .. ``c * bandwidth``.
    """
    center_frequencies: tuple[float, ...]
    bandwidth: float

    def __post_init__(self):
        if self.bandwidth <= 1.0:
            raise ValueError(f"Bandwidth ratio must be > 1, got {self.bandwidth}")
        centers = self.center_frequencies
        if any(b <= a for a, b in zip(centers, centers[1:])):
            raise ValueError("Center frequencies must be strictly ascending")

    @property
    def band_count(self) -> int:
        return len(self.center_frequencies)


BAND_LAYOUTS: Mapping[BandType, BandLayout] = MappingProxyType({
    BandType.FOUR_BAND: BandLayout(
        (125.0, 500.0, 1000.0, 2000.0),
        1.414,  # 2^(1/2)
    ),
    BandType.FOUR_BAND_VISUAL: BandLayout(
        (250.0, 400.0, 600.0, 800.0),
        1.260,  # 2^(1/3)
    ),
    BandType.EIGHT_BAND: BandLayout(
        (63.0, 125.0, 500.0, 1000.0, 2000.0, 4000.0, 6000.0, 8000.0),
        1.414,
    ),
    BandType.TEN_BAND: BandLayout(
        (31.5, 63.0, 125.0, 250.0, 500.0, 1000.0, 2000.0, 4000.0, 8000.0, 16000.0),
        1.414,
    ),
    BandType.TWENTY_SIX_BAND: BandLayout(
        (25.0, 31.5, 40.0, 50.0, 63.0, 80.0, 100.0, 125.0, 160.0, 200.0,
         250.0, 315.0, 400.0, 500.0, 630.0, 800.0, 1000.0, 1250.0, 1600.0,
         2000.0, 2500.0, 3150.0, 4000.0, 5000.0, 6300.0, 8000.0),
        1.122,  # 2^(1/6)
    ),
    BandType.THIRTY_ONE_BAND: BandLayout(
        (20.0, 25.0, 31.5, 40.0, 50.0, 63.0, 80.0, 100.0, 125.0, 160.0,
         200.0, 250.0, 315.0, 400.0, 500.0, 630.0, 800.0, 1000.0, 1250.0,
         1600.0, 2000.0, 2500.0, 3150.0, 4000.0, 5000.0, 6300.0, 8000.0,
         10000.0, 12500.0, 16000.0, 20000.0),
        1.122,
    ),
})


def parse_band_type(value: Union[BandType, str]) -> BandType:
    """Resolve a BandType from the enum itself, its value ("TenBand") or its name ("ten_band")."""
    if isinstance(value, BandType):
        return value
    if isinstance(value, str):
        key = value.strip()
        for band_type in BandType:
            if key == band_type.value or key.upper() == band_type.name:
                return band_type
        lowered = key.lower()
        for band_type in BandType:
            if lowered == band_type.value.lower():
                return band_type
    choices = ", ".join(b.value for b in BandType)
    raise ValueError(f"Unknown band type {value!r} (expected one of: {choices})")


def get_layout(band_type: Union[BandType, str]) -> BandLayout:
    """Get the layout for a preset."""
    return BAND_LAYOUTS[parse_band_type(band_type)]
