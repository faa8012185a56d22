"""
Tests for spectrum sources.
"""
import numpy as np
import pytest

from audiospectrum.audio.base import FFTWindow, SpectrumSource, fill_buffer
from audiospectrum.audio.sources import (
    CallbackSpectrumSource,
    FrameSequenceSource,
    StaticSpectrumSource,
)


class TestFillBuffer:
    """Tests for copying source data into the analyzer buffer."""

    def test_pads_short_data(self):
        buffer = np.ones(8, dtype=np.float32)
        fill_buffer(buffer, [1.0, 2.0])
        np.testing.assert_array_equal(buffer, [1, 2, 0, 0, 0, 0, 0, 0])

    def test_truncates_long_data(self):
        buffer = np.zeros(3, dtype=np.float32)
        fill_buffer(buffer, np.arange(10))
        np.testing.assert_array_equal(buffer, [0, 1, 2])


class TestStaticSpectrumSource:
    """Tests for the fixed source."""

    def test_is_a_spectrum_source(self):
        assert isinstance(StaticSpectrumSource(np.zeros(4)), SpectrumSource)

    def test_same_data_every_call(self):
        source = StaticSpectrumSource([0.1, 0.2], sample_rate=48000)
        assert source.sample_rate == 48000.0
        for _ in range(3):
            buffer = np.zeros(4, dtype=np.float32)
            source.get_spectrum_data(buffer, 0, FFTWindow.HANNING)
            np.testing.assert_allclose(buffer, [0.1, 0.2, 0.0, 0.0])

    def test_abstract_base_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            SpectrumSource()


class TestFrameSequenceSource:
    """Tests for pre-rendered frame replay."""

    def test_replays_then_silence(self):
        frames = np.array([[1.0, 0.0], [0.0, 2.0]])
        source = FrameSequenceSource(frames)
        buffer = np.zeros(2, dtype=np.float32)
        source.get_spectrum_data(buffer)
        np.testing.assert_array_equal(buffer, [1.0, 0.0])
        source.get_spectrum_data(buffer)
        np.testing.assert_array_equal(buffer, [0.0, 2.0])
        assert source.exhausted
        source.get_spectrum_data(buffer)
        np.testing.assert_array_equal(buffer, [0.0, 0.0])

    def test_loop_wraps(self):
        source = FrameSequenceSource(np.array([[1.0], [2.0]]), loop=True)
        buffer = np.zeros(1, dtype=np.float32)
        seen = []
        for _ in range(5):
            source.get_spectrum_data(buffer)
            seen.append(float(buffer[0]))
        assert seen == [1.0, 2.0, 1.0, 2.0, 1.0]
        assert not source.exhausted

    def test_single_frame_promoted(self):
        source = FrameSequenceSource(np.array([0.5, 0.5]))
        assert source.frame_count == 1

    def test_rejects_3d(self):
        with pytest.raises(ValueError):
            FrameSequenceSource(np.zeros((2, 2, 2)))

    def test_rewind(self):
        source = FrameSequenceSource(np.array([[1.0], [2.0]]))
        buffer = np.zeros(1, dtype=np.float32)
        source.get_spectrum_data(buffer)
        source.rewind()
        assert source.position == 0

    def test_from_file(self, tmp_path):
        path = tmp_path / "frames.npy"
        np.save(path, np.ones((3, 16), dtype=np.float32))
        source = FrameSequenceSource.from_file(path, sample_rate=22050)
        assert source.frame_count == 3
        assert source.sample_rate == 22050.0

    def test_from_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            FrameSequenceSource.from_file(tmp_path / "missing.npy")


class TestCallbackSpectrumSource:
    """Tests for the callable adapter."""

    def test_calls_callback_each_frame(self):
        values = iter([[1.0], [3.0]])
        source = CallbackSpectrumSource(lambda: next(values), sample_rate=8000)
        buffer = np.zeros(2, dtype=np.float32)
        source.get_spectrum_data(buffer)
        assert buffer[0] == 1.0
        source.get_spectrum_data(buffer)
        assert buffer[0] == 3.0
        assert source.sample_rate == 8000.0
