"""
Command line entry point for hand gesture classification.
"""
import argparse
import logging
import sys
from typing import List, Optional

import yaml

from .config import load_config
from .gestures import GestureProcessor
from .landmarks import landmarks_from_xy
from .types import DetectedHand, FrameResult

logger = logging.getLogger(__name__)


def load_hand_file(path: str) -> DetectedHand:
    """
    Read landmarks from a JSON or YAML file.

    The file holds either a list of [x, y] / [x, y, z] entries or a mapping
    with a `landmarks` list and an optional `confidence`.
    """
    with open(path, 'r') as f:
        data = yaml.safe_load(f)

    confidence = 1.0
    if isinstance(data, dict):
        confidence = float(data.get('confidence', 1.0))
        data = data.get('landmarks')

    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of landmarks")

    try:
        landmarks = landmarks_from_xy(data)
    except (TypeError, IndexError, KeyError) as e:
        raise ValueError(f"{path}: bad landmark entry, expected [x, y] or [x, y, z] ({e})") from e

    return DetectedHand(landmarks=landmarks, confidence=confidence)


def print_result(result: FrameResult) -> None:
    print(f"Gesture: {result.gesture_label}")
    print(f"Landmarks: {result.landmarks_count}")
    print(f"Confidence: {result.confidence:.2f}")
    if result.debug_trace:
        print(result.debug_trace, end="")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="handgesture", description="Classify hand gestures from landmarks")
    parser.add_argument("--config", help="Path to a YAML config file")
    parser.add_argument("--no-mirror", action="store_true", help="Landmarks are not mirrored")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)
    classify = sub.add_parser("classify", help="Classify landmarks from a JSON/YAML file")
    classify.add_argument("path")
    image = sub.add_parser("image", help="Detect and classify a hand in an image")
    image.add_argument("path")
    return parser


def _classify_image(path: str, cfg, processor: GestureProcessor) -> FrameResult:
    import cv2

    from .recognizer import LiveGestureRecognizer
    from .tracker import HandsTracker

    frame = cv2.imread(path)
    if frame is None:
        raise ValueError(f"Could not read image: {path}")

    with LiveGestureRecognizer(HandsTracker.from_config(cfg.tracker, static_image_mode=True), processor) as recognizer:
        return recognizer.submit(frame)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the command line tool."""
    args = _build_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    cfg = load_config(args.config)
    if args.no_mirror:
        cfg.normalizer.mirror = False
    processor = GestureProcessor(cfg)

    try:
        if args.command == "classify":
            result = processor.process_hand(load_hand_file(args.path))
        else:
            result = _classify_image(args.path, cfg, processor)
    except (OSError, ValueError, RuntimeError, ImportError, yaml.YAMLError) as e:
        logger.error(f"❌ {e}")
        return 1

    print_result(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
