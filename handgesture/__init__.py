"""
Hand Gesture Classification

Turns 21 MediaPipe hand landmarks into a per-finger extension vector and a
named gesture with a human-readable decision trace.
"""

__version__ = "0.1.0"

from .types import LandmarkPoint, FingerExtensionVector, GestureResult, DetectedHand, FrameResult, ExtensionStrategy
from .errors import GestureError, InsufficientLandmarks, UnclassifiedCombination
from .config import load_config, Cfg
from .landmarks import (
    LM, distance, mirror_landmarks, landmarks_from_xy,
    DistanceRatioExtension, VerticalExtension, extension_strategy_from_config,
)
from .gestures import Gesture, GestureProcessor, build_debug_trace, classify_gesture, match_gesture
from .recognizer import LiveGestureRecognizer

__all__ = [
    "LandmarkPoint",
    "FingerExtensionVector",
    "GestureResult",
    "DetectedHand",
    "FrameResult",
    "ExtensionStrategy",
    "GestureError",
    "InsufficientLandmarks",
    "UnclassifiedCombination",
    "load_config",
    "Cfg",
    "LM",
    "distance",
    "mirror_landmarks",
    "landmarks_from_xy",
    "DistanceRatioExtension",
    "VerticalExtension",
    "extension_strategy_from_config",
    "Gesture",
    "GestureProcessor",
    "build_debug_trace",
    "classify_gesture",
    "match_gesture",
    "LiveGestureRecognizer",
]
