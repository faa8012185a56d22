"""audiospectrum - replay pre-rendered magnitude spectra through the band analyzer.

Prints one line per frame: the band levels as a bar graph, the peak bars and
the overall amplitude.
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from .analysis.spectrum import AudioSpectrum
from .audio.sources import FrameSequenceSource
from .config.settings import AppSettings, ConfigError, load_config, validate
from .driver import FrameDriver, render_bars

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="audiospectrum",
        description="Reduce pre-rendered magnitude spectra to visualizer bands",
    )
    parser.add_argument("frames", help="2-D .npy file, one magnitude spectrum per row")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--band-type", help="Band layout preset, e.g. TenBand")
    parser.add_argument("--fps", type=int, help="Frames per second of the material")
    parser.add_argument("--sample-rate", type=int, help="Sample rate of the material in Hz")
    parser.add_argument("--loop", action="store_true", help="Replay until interrupted")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> AppSettings:
    """Load the config file (if any) and apply command line overrides."""
    settings = load_config(args.config) if args.config else AppSettings()
    if args.band_type:
        settings.analyzer.band_type = args.band_type
    if args.fps:
        settings.playback.fps = args.fps
    if args.sample_rate:
        settings.playback.sample_rate = args.sample_rate
    if args.loop:
        settings.playback.loop = True
    return validate(settings)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command line entry point. Returns the process exit status."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        settings = build_settings(args)
        source = FrameSequenceSource.from_file(
            args.frames,
            sample_rate=settings.playback.sample_rate,
            loop=settings.playback.loop,
        )
    except (FileNotFoundError, ConfigError, ValueError) as e:
        logger.error(str(e))
        return 1

    analyzer = AudioSpectrum.from_settings(source, settings.analyzer)
    driver = FrameDriver(analyzer)
    delta = 1.0 / settings.playback.fps

    try:
        while not source.exhausted:
            frame = driver.step(delta)
            print(
                f"{driver.frame_count:6d} |{render_bars(frame.levels)}| "
                f"|{render_bars(frame.peak_levels)}| amp={frame.amplitude:.3f}"
            )
    except KeyboardInterrupt:
        logger.info("Interrupted")

    logger.info(f"Processed {driver.frame_count} frames")
    return 0


if __name__ == "__main__":
    sys.exit(main())
