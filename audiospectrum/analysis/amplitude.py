"""Overall loudness estimate derived from the per-band levels."""

import logging
from typing import Sequence

import numpy as np

logger = logging.getLogger(__name__)

# Initial historical maximum; keeps the first divisions finite.
AMPLITUDE_EPSILON = 0.01


class AmplitudeEstimator:
    """Reduces band levels to one scalar normalized against the loudest total seen."""

    def __init__(self, strict: bool = False):
        self._strict = strict
        self._amplitude: float = 0.0
        self._amplitude_highest: float = AMPLITUDE_EPSILON
        self._amplitude_buffer: float = 0.0

    @property
    def amplitude(self) -> float:
        return self._amplitude

    @property
    def amplitude_highest(self) -> float:
        return self._amplitude_highest

    @property
    def amplitude_buffer(self) -> float:
        return self._amplitude_buffer

    def update(self, levels: Sequence[float], falldown: float) -> float:
        """
        Fold one frame of band levels into the estimate.

        Args:
            levels: Normalized level of every band
            falldown: Peak-hold decay for this frame (fall speed * delta time)

        Returns:
            Current amplitude (sum of levels / highest sum ever seen)
        """
        current = float(np.sum(levels, dtype=np.float64))
        if current > self._amplitude_highest:
            self._amplitude_highest = current

        highest = self._amplitude_highest
        if highest == 0.0:
            if self._strict:
                raise AssertionError("Amplitude divisor is zero")
            logger.error(f"Amplitude divisor is zero, clamping to {AMPLITUDE_EPSILON}")
            highest = self._amplitude_highest = AMPLITUDE_EPSILON

        self._amplitude = current / highest
        # Always equals the amplitude itself.
        self._amplitude_buffer = max(self._amplitude - falldown, self._amplitude)
        return self._amplitude

    def reset(self) -> None:
        """Reset estimator state."""
        self._amplitude = 0.0
        self._amplitude_highest = AMPLITUDE_EPSILON
        self._amplitude_buffer = 0.0
