"""
Tests for the frame driver and the command line entry point.
"""
import numpy as np
import pytest

from audiospectrum.analysis.spectrum import AudioSpectrum
from audiospectrum.audio.sources import StaticSpectrumSource
from audiospectrum.driver import BAR_CHARS, FrameDriver, render_bars
from audiospectrum.main import main

from conftest import NUM_SAMPLES, SAMPLE_RATE, bin_for


class FakeClock:
    def __init__(self, times):
        self._times = iter(times)

    def __call__(self):
        return next(self._times)


class RecordingAnalyzer(AudioSpectrum):
    """Analyzer that records the delta times it was driven with."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.deltas = []

    def update(self, delta_time):
        self.deltas.append(delta_time)
        super().update(delta_time)


class TestFrameDriver:
    """Tests for per-frame timing."""

    def test_tick_measures_elapsed_time(self, silent_source):
        analyzer = RecordingAnalyzer(silent_source)
        driver = FrameDriver(analyzer, clock=FakeClock([10.0, 10.5, 10.75]))
        driver.tick()
        driver.tick()
        driver.tick()
        assert analyzer.deltas == [0.0, 0.5, 0.25]
        assert driver.frame_count == 3

    def test_backwards_clock_clamped(self, silent_source):
        analyzer = RecordingAnalyzer(silent_source)
        driver = FrameDriver(analyzer, clock=FakeClock([5.0, 4.0]))
        driver.tick()
        driver.tick()
        assert analyzer.deltas == [0.0, 0.0]

    def test_run_fixed_step(self, silent_source):
        analyzer = RecordingAnalyzer(silent_source)
        driver = FrameDriver(analyzer)
        frames = list(driver.run(4, fps=50))
        assert len(frames) == 4
        assert analyzer.deltas == [pytest.approx(0.02)] * 4

    def test_run_rejects_bad_fps(self, silent_source):
        driver = FrameDriver(AudioSpectrum(silent_source))
        with pytest.raises(ValueError):
            list(driver.run(1, fps=0))

    def test_step_returns_snapshot(self, tone_spectrum):
        driver = FrameDriver(AudioSpectrum(StaticSpectrumSource(tone_spectrum, SAMPLE_RATE)))
        frame = driver.step(1 / 60)
        assert frame.amplitude == pytest.approx(1.0)
        assert frame.levels[5] == 1.0

    def test_reset(self, silent_source):
        driver = FrameDriver(AudioSpectrum(silent_source), clock=FakeClock([1.0, 2.0]))
        driver.tick()
        driver.reset()
        assert driver.frame_count == 0


class TestRenderBars:
    """Tests for the text bar graph."""

    def test_extremes(self):
        assert render_bars([0.0, 1.0]) == BAR_CHARS[0] + BAR_CHARS[-1]

    def test_clamps_out_of_range(self):
        assert render_bars([-1.0, 3.0]) == BAR_CHARS[0] + BAR_CHARS[-1]

    def test_one_char_per_value(self):
        assert len(render_bars(np.linspace(0, 1, 31))) == 31


class TestMain:
    """Tests for the command line entry point."""

    def test_replays_file(self, tmp_path, capsys):
        frames = np.zeros((3, NUM_SAMPLES), dtype=np.float32)
        frames[:, bin_for(1000)] = 0.5
        path = tmp_path / "frames.npy"
        np.save(path, frames)
        assert main([str(path), "--fps", "30"]) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 3
        assert "amp=1.000" in lines[-1]

    def test_band_type_override(self, tmp_path, capsys):
        path = tmp_path / "frames.npy"
        np.save(path, np.zeros((1, NUM_SAMPLES), dtype=np.float32))
        assert main([str(path), "--band-type", "FourBand"]) == 0
        line = capsys.readouterr().out.strip()
        assert len(line.split("|")[1]) == 4

    def test_missing_file(self, tmp_path):
        assert main([str(tmp_path / "missing.npy")]) == 1

    def test_bad_band_type(self, tmp_path):
        path = tmp_path / "frames.npy"
        np.save(path, np.zeros((1, 8), dtype=np.float32))
        assert main([str(path), "--band-type", "Nope"]) == 1

    def test_config_file(self, tmp_path, capsys):
        config = tmp_path / "config.yaml"
        config.write_text("analyzer:\n  band_type: EightBand\n", encoding="utf-8")
        path = tmp_path / "frames.npy"
        np.save(path, np.zeros((2, NUM_SAMPLES), dtype=np.float32))
        assert main([str(path), "--config", str(config)]) == 0
        assert len(capsys.readouterr().out.strip().splitlines()) == 2
