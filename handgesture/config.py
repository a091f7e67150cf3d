"""
Configuration management for hand gesture classification.
"""
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass, field


EXTENSION_STRATEGIES = ("distance_ratio", "vertical")


@dataclass
class TrackerConfig:
    """MediaPipe hand landmarker settings."""
    max_num_hands: int = 1
    min_detection_confidence: float = 0.7
    min_presence_confidence: float = 0.7
    min_tracking_confidence: float = 0.5
    model_asset_path: str = "models/hand_landmarker.task"


@dataclass
class NormalizerConfig:
    """Landmark normalization settings."""
    mirror: bool = True  # front-facing camera feeds are mirrored


@dataclass
class ClassifierConfig:
    """Finger extension classifier settings."""
    extension_strategy: str = "distance_ratio"
    finger_ratio: float = 1.1  # tip-to-MCP must exceed this multiple of PIP-to-MCP
    thumb_ratio: float = 1.1  # vertical strategy only
    thumb_min_dx: float = 0.04  # vertical strategy only


@dataclass
class GestureThresholds:
    """Distance thresholds (normalized units) used to refine gestures."""
    victory_spread: float = 0.08
    open_hand_spread: float = 0.06


@dataclass
class Cfg:
    """Main configuration class."""
    tracker: TrackerConfig = field(default_factory=TrackerConfig)
    normalizer: NormalizerConfig = field(default_factory=NormalizerConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    gestures: GestureThresholds = field(default_factory=GestureThresholds)


def default_config_path() -> Path:
    """Location of the configuration file shipped with the package."""
    return Path(__file__).parent / "config.default.yaml"


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses config.default.yaml

    Returns:
        Configuration object with all settings
    """
    if path is None:
        path = default_config_path()

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    return _dict_to_config(data)


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    defaults = Cfg()

    tracker_data = data.get('tracker') or {}
    tracker = TrackerConfig(
        max_num_hands=int(tracker_data.get('max_num_hands', defaults.tracker.max_num_hands)),
        min_detection_confidence=float(tracker_data.get(
            'min_detection_confidence', defaults.tracker.min_detection_confidence)),
        min_presence_confidence=float(tracker_data.get(
            'min_presence_confidence', defaults.tracker.min_presence_confidence)),
        min_tracking_confidence=float(tracker_data.get(
            'min_tracking_confidence', defaults.tracker.min_tracking_confidence)),
        model_asset_path=str(tracker_data.get('model_asset_path', defaults.tracker.model_asset_path))
    )

    normalizer_data = data.get('normalizer') or {}
    mirror = normalizer_data.get('mirror', defaults.normalizer.mirror)
    if not isinstance(mirror, bool):
        raise ValueError(f"normalizer.mirror must be true or false, got {mirror!r}")
    normalizer = NormalizerConfig(mirror=mirror)

    classifier_data = data.get('classifier') or {}
    classifier = ClassifierConfig(
        extension_strategy=str(classifier_data.get(
            'extension_strategy', defaults.classifier.extension_strategy)),
        finger_ratio=float(classifier_data.get('finger_ratio', defaults.classifier.finger_ratio)),
        thumb_ratio=float(classifier_data.get('thumb_ratio', defaults.classifier.thumb_ratio)),
        thumb_min_dx=float(classifier_data.get('thumb_min_dx', defaults.classifier.thumb_min_dx))
    )
    if classifier.extension_strategy not in EXTENSION_STRATEGIES:
        raise ValueError(
            f"Unknown extension strategy '{classifier.extension_strategy}'. "
            f"Available: {list(EXTENSION_STRATEGIES)}"
        )

    gestures_data = data.get('gestures') or {}
    gestures = GestureThresholds(
        victory_spread=float(gestures_data.get('victory_spread', defaults.gestures.victory_spread)),
        open_hand_spread=float(gestures_data.get('open_hand_spread', defaults.gestures.open_hand_spread))
    )

    return Cfg(
        tracker=tracker,
        normalizer=normalizer,
        classifier=classifier,
        gestures=gestures
    )
