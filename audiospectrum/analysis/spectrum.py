"""Band analyzer: raw magnitude spectrum in, self-calibrating band levels out."""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional, Union

import numpy as np

from ..audio.base import FFTWindow, SpectrumSource, fill_buffer
from .amplitude import AmplitudeEstimator
from .bands import BAND_LAYOUTS, BandLayout, BandType, parse_band_type
from .index import band_index_range

logger = logging.getLogger(__name__)

# Initial running maximum per band; keeps silent frames from dividing by zero.
MAX_LEVEL_EPSILON = 0.01


@dataclass(frozen=True)
class StructuralReset:
    """Emitted when a reconfiguration reallocated buffers and dropped calibration."""
    number_of_samples: int
    band_type: BandType
    band_count: int
    buffer_reallocated: bool
    bands_reallocated: bool


@dataclass
class SpectrumFrame:
    """Outputs of one analyzed frame."""
    levels: np.ndarray
    peak_levels: np.ndarray
    mean_levels: np.ndarray
    amplitude: float
    amplitude_buffer: float


class AudioSpectrum:
    """Reduces a raw magnitude spectrum to a handful of frequency bands.

    Every band is normalized against the loudest energy it has produced since
    the last structural reset, so a level of 1.0 means "as loud as this band
    has ever been". Each band also carries a linearly decaying peak and a
    smoothed mean, and all bands together feed one amplitude value.
    """

    def __init__(self,
                 source: Optional[SpectrumSource] = None,
                 number_of_samples: int = 1024,
                 band_type: Union[BandType, str] = BandType.TEN_BAND,
                 fall_speed: float = 0.08,
                 sensitivity: float = 8.0,
                 max_decay: float = 0.0,
                 strict: bool = False,
                 on_reset: Optional[Callable[[StructuralReset], None]] = None):
        """
        Initialize the analyzer.

        Args:
            source: Provider of the raw spectrum, used by update()
            number_of_samples: Raw spectrum length (power of 2 expected by sources)
            band_type: Band layout preset
            fall_speed: Peak-hold decay in level units per second
            sensitivity: Steepness of the mean tracker's exponential filter
            max_decay: Opt-in decay rate (per second) of the running maxima, 0 disables
            strict: Raise on internal invariant breaches instead of clamping
            on_reset: Called with every StructuralReset after construction
        """
        self._source = source
        self._fall_speed = 0.0
        self._sensitivity = 0.0
        self._max_decay = 0.0
        self.fall_speed = fall_speed
        self.sensitivity = sensitivity
        self.max_decay = max_decay
        self._strict = strict
        self.on_reset: Optional[Callable[[StructuralReset], None]] = None

        self._number_of_samples = 0
        self._band_type = parse_band_type(band_type)
        self._raw_spectrum: Optional[np.ndarray] = None
        self._levels: Optional[np.ndarray] = None
        self._peak_levels: Optional[np.ndarray] = None
        self._mean_levels: Optional[np.ndarray] = None
        self._max_levels: Optional[np.ndarray] = None
        self._ranges: Optional[list[tuple[int, int]]] = None
        self._ranges_key: Optional[tuple] = None
        self._amplitude = AmplitudeEstimator(strict=strict)

        self.configure(number_of_samples=number_of_samples, band_type=self._band_type)
        self.on_reset = on_reset

    @classmethod
    def from_settings(cls, source: Optional[SpectrumSource], settings) -> "AudioSpectrum":
        """Build an analyzer from an AnalyzerSettings instance."""
        return cls(
            source,
            number_of_samples=settings.number_of_samples,
            band_type=settings.band_type,
            fall_speed=settings.fall_speed,
            sensitivity=settings.sensitivity,
            max_decay=settings.max_decay,
        )

    # Configuration

    @property
    def source(self) -> Optional[SpectrumSource]:
        return self._source

    @source.setter
    def source(self, value: Optional[SpectrumSource]) -> None:
        self._source = value

    @property
    def number_of_samples(self) -> int:
        return self._number_of_samples

    @number_of_samples.setter
    def number_of_samples(self, value: int) -> None:
        self.configure(number_of_samples=value)

    @property
    def band_type(self) -> BandType:
        return self._band_type

    @band_type.setter
    def band_type(self, value: Union[BandType, str]) -> None:
        self.configure(band_type=value)

    @property
    def layout(self) -> BandLayout:
        return BAND_LAYOUTS[self._band_type]

    @property
    def band_count(self) -> int:
        return len(self._levels)

    @property
    def fall_speed(self) -> float:
        return self._fall_speed

    @fall_speed.setter
    def fall_speed(self, value: float) -> None:
        self._fall_speed = max(0.0, float(value))

    @property
    def sensitivity(self) -> float:
        return self._sensitivity

    @sensitivity.setter
    def sensitivity(self, value: float) -> None:
        self._sensitivity = max(0.0, float(value))

    @property
    def max_decay(self) -> float:
        return self._max_decay

    @max_decay.setter
    def max_decay(self, value: float) -> None:
        self._max_decay = max(0.0, float(value))

    def configure(self,
                  number_of_samples: Optional[int] = None,
                  band_type: Union[BandType, str, None] = None) -> Optional[StructuralReset]:
        """
        Apply a new sample count and/or band layout.

        Buffers are only reallocated when their length actually changes, so
        repeating a call with the same values is a no-op. A reallocation of the
        band state discards its calibration (running maxima and means).

        Returns:
            The StructuralReset that happened, or None if nothing was reallocated
        """
        samples = self._number_of_samples if number_of_samples is None else int(number_of_samples)
        if samples < 1:
            raise ValueError(f"number_of_samples must be positive, got {number_of_samples}")
        new_type = self._band_type if band_type is None else parse_band_type(band_type)
        band_count = BAND_LAYOUTS[new_type].band_count

        buffer_reallocated = self._raw_spectrum is None or len(self._raw_spectrum) != samples
        # Calibration is tied to the bin width, so a new sample count resets it too.
        bands_reallocated = (buffer_reallocated or self._levels is None
                             or len(self._levels) != band_count)

        if new_type != self._band_type:
            logger.debug(f"Band layout {self._band_type.value} -> {new_type.value}")
        self._number_of_samples = samples
        self._band_type = new_type

        if buffer_reallocated:
            self._raw_spectrum = np.zeros(samples, dtype=np.float32)
        if bands_reallocated:
            self._allocate_bands(band_count)

        if not (buffer_reallocated or bands_reallocated):
            return None

        event = StructuralReset(
            number_of_samples=samples,
            band_type=new_type,
            band_count=band_count,
            buffer_reallocated=buffer_reallocated,
            bands_reallocated=bands_reallocated,
        )
        logger.info(
            f"Structural reset: {samples} samples, {new_type.value} ({band_count} bands)"
        )
        if self.on_reset is not None:
            self.on_reset(event)
        return event

    def _allocate_bands(self, band_count: int) -> None:
        self._levels = np.zeros(band_count, dtype=np.float64)
        self._peak_levels = np.zeros(band_count, dtype=np.float64)
        self._mean_levels = np.zeros(band_count, dtype=np.float64)
        self._max_levels = np.full(band_count, MAX_LEVEL_EPSILON, dtype=np.float64)

    def reset(self) -> None:
        """Clear all band and amplitude state, keeping the configuration."""
        self._raw_spectrum[:] = 0.0
        self._allocate_bands(len(self._levels))
        self._amplitude.reset()

    # Per-frame analysis

    def band_ranges(self, sample_rate: Optional[float] = None) -> list[tuple[int, int]]:
        """Inclusive (imin, imax) spectrum index range of every band."""
        if sample_rate is None:
            sample_rate = self._require_source().sample_rate
        key = (self._number_of_samples, self._band_type, float(sample_rate))
        if self._ranges is None or self._ranges_key != key:
            layout = self.layout
            self._ranges = [
                band_index_range(center, layout.bandwidth, self._number_of_samples, sample_rate)
                for center in layout.center_frequencies
            ]
            self._ranges_key = key
        return self._ranges

    def update(self, delta_time: float) -> None:
        """
        Analyze one frame pulled from the source.

        Args:
            delta_time: Seconds elapsed since the previous frame; negative or NaN counts as 0
        """
        source = self._require_source()
        delta_time = self._clamp_delta(delta_time)
        source.get_spectrum_data(self._raw_spectrum, 0, FFTWindow.BLACKMAN_HARRIS)
        self._process(delta_time, source.sample_rate)

    def analyze(self, spectrum: np.ndarray, delta_time: float,
                sample_rate: Optional[float] = None) -> SpectrumFrame:
        """
        Analyze one frame from a spectrum the caller already holds.

        The spectrum is truncated or zero-padded to number_of_samples.

        Returns:
            Snapshot of the outputs for this frame
        """
        if sample_rate is None:
            sample_rate = self._require_source().sample_rate
        delta_time = self._clamp_delta(delta_time)
        fill_buffer(self._raw_spectrum, spectrum)
        self._process(delta_time, sample_rate)
        return self.snapshot()

    def _require_source(self) -> SpectrumSource:
        if self._source is None:
            raise RuntimeError("No spectrum source attached")
        return self._source

    @staticmethod
    def _clamp_delta(delta_time: float) -> float:
        delta_time = float(delta_time)
        if not delta_time > 0.0 or math.isinf(delta_time):
            logger.debug(f"Clamping delta_time {delta_time} to 0")
            return 0.0
        return delta_time

    def _process(self, delta_time: float, sample_rate: float) -> None:
        raw = self._raw_spectrum
        levels = self._levels
        peaks = self._peak_levels
        means = self._mean_levels
        maxima = self._max_levels

        falldown = self._fall_speed * delta_time
        mean_filter = math.exp(-self._sensitivity * delta_time)
        max_fade = math.exp(-self._max_decay * delta_time) if self._max_decay > 0 else 1.0

        for band, (imin, imax) in enumerate(self.band_ranges(sample_rate)):
            if imin <= imax:
                energy = float(np.sum(raw[imin:imax + 1], dtype=np.float64))
            else:
                energy = 0.0

            if max_fade < 1.0:
                maxima[band] = max(maxima[band] * max_fade, MAX_LEVEL_EPSILON)
            maxima[band] = max(maxima[band], energy)

            divisor = maxima[band]
            if divisor == 0.0:
                divisor = self._zero_divisor(band)

            level = energy / divisor
            levels[band] = level
            peaks[band] = max(peaks[band] - falldown, level)
            # Raw energy minus a filtered level delta; the two are in different units.
            means[band] = energy - (level - means[band]) * mean_filter

        self._amplitude.update(levels, falldown)
        logger.debug(f"Frame dt={delta_time:.4f}s amplitude={self._amplitude.amplitude:.3f}")

    def _zero_divisor(self, band: int) -> float:
        message = f"Running maximum of band {band} is zero"
        if self._strict:
            raise AssertionError(message)
        logger.error(f"{message}, clamping to {MAX_LEVEL_EPSILON}")
        self._max_levels[band] = MAX_LEVEL_EPSILON
        return MAX_LEVEL_EPSILON

    # Outputs

    @property
    def levels(self) -> np.ndarray:
        return self._levels.copy()

    @property
    def peak_levels(self) -> np.ndarray:
        return self._peak_levels.copy()

    @property
    def mean_levels(self) -> np.ndarray:
        return self._mean_levels.copy()

    @property
    def max_levels(self) -> np.ndarray:
        return self._max_levels.copy()

    @property
    def raw_spectrum(self) -> np.ndarray:
        return self._raw_spectrum.copy()

    @property
    def amplitude(self) -> float:
        return self._amplitude.amplitude

    @property
    def amplitude_buffer(self) -> float:
        return self._amplitude.amplitude_buffer

    @property
    def amplitude_highest(self) -> float:
        return self._amplitude.amplitude_highest

    def snapshot(self) -> SpectrumFrame:
        """Copy of the current outputs."""
        return SpectrumFrame(
            levels=self.levels,
            peak_levels=self.peak_levels,
            mean_levels=self.mean_levels,
            amplitude=self.amplitude,
            amplitude_buffer=self.amplitude_buffer,
        )
