"""Per-frame host loop around an AudioSpectrum analyzer."""

import logging
import time
from typing import Callable, Iterator, Optional, Sequence

from .analysis.spectrum import AudioSpectrum, SpectrumFrame

logger = logging.getLogger(__name__)

BAR_CHARS = " ▁▂▃▄▅▆▇█"


class FrameDriver:
    """Calls the analyzer once per frame with the elapsed time since the last frame."""

    def __init__(self, analyzer: AudioSpectrum,
                 clock: Callable[[], float] = time.perf_counter):
        self._analyzer = analyzer
        self._clock = clock
        self._last_tick: Optional[float] = None
        self._frame_count = 0

    @property
    def analyzer(self) -> AudioSpectrum:
        return self._analyzer

    @property
    def frame_count(self) -> int:
        return self._frame_count

    def tick(self) -> SpectrumFrame:
        """Run one frame timed by the clock. The first frame has a delta of 0."""
        now = self._clock()
        delta = 0.0 if self._last_tick is None else max(0.0, now - self._last_tick)
        self._last_tick = now
        return self.step(delta)

    def step(self, delta_time: float) -> SpectrumFrame:
        """Run one frame with an explicit delta time."""
        self._analyzer.update(delta_time)
        self._frame_count += 1
        return self._analyzer.snapshot()

    def run(self, frames: int, fps: float) -> Iterator[SpectrumFrame]:
        """Drive a fixed number of frames at a fixed step, without sleeping."""
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        delta = 1.0 / fps
        logger.debug(f"Running {frames} frames at {fps} fps")
        for _ in range(frames):
            yield self.step(delta)

    def reset(self) -> None:
        self._last_tick = None
        self._frame_count = 0


def render_bars(values: Sequence[float]) -> str:
    """Render values in [0, 1] as a one-line block-character bar graph."""
    steps = len(BAR_CHARS) - 1
    out = []
    for v in values:
        v = max(0.0, min(1.0, float(v)))
        out.append(BAR_CHARS[int(round(v * steps))])
    return "".join(out)
