"""
Gesture rules that turn finger extension into named hand gestures.
"""
import logging
from enum import Enum
from typing import Optional

from .config import Cfg, GestureThresholds
from .errors import InsufficientLandmarks, UnclassifiedCombination
from .landmarks import (
    LM, NUM_LANDMARKS, DistanceRatioExtension, average_tip_spread, distance,
    extension_strategy_from_config, mirror_landmarks,
)
from .types import (
    DetectedHand, ExtensionStrategy, FingerExtensionVector, FrameResult,
    GestureResult, HandLandmarkSet,
)

logger = logging.getLogger(__name__)


class Gesture(str, Enum):
    """Closed vocabulary of gesture labels."""
    CLOSED_FIST = "Closed fist"
    POINTING = "Pointing (index)"
    THUMBS_UP = "Thumbs up"
    MIDDLE_FINGER = "Middle finger"
    RING_FINGER = "Ring finger"
    PINKY = "Pinky"
    ONE_FINGER = "One finger"
    VICTORY = "Victory / peace sign"
    TWO_FINGERS_TOGETHER = "Two fingers together"
    GUN = "Gun / L shape"
    SHAKA = "Shaka / hang loose"
    ROCK_ON = "Rock on"
    TWO_FINGERS = "Two fingers"
    THREE_NO_THUMB = "Three fingers (no thumb)"
    THREE_WITH_THUMB = "Three fingers (with thumb)"
    THREE_FINGERS = "Three fingers"
    FOUR_NO_THUMB = "Four fingers (no thumb)"
    FOUR_FINGERS = "Four fingers"
    OPEN_HAND = "Open hand"
    FIVE_TOGETHER = "Five fingers together"
    INSUFFICIENT_DATA = "Insufficient data"
    NO_HAND = "No hand detected"
    UNKNOWN = "Unknown gesture"


READY_LABEL = "Ready to detect"

FINGER_NAMES = ("Thumb", "Index", "Middle", "Ring", "Pinky")


def build_debug_trace(vector: FingerExtensionVector) -> str:
    """
    Render the per-finger decisions as a multi-line trace.

    Args:
        vector: Finger extension vector

    Returns:
        One line per finger with an up/down arrow, followed by the total
    """
    lines = ["=== GESTURE DEBUG ==="]
    for name, extended in zip(FINGER_NAMES, vector):
        lines.append(f"{name}: {'↑' if extended else '↓'}")
    lines.append(f"Total extended: {vector.extended_count}")
    lines.append("=====================")
    return "\n".join(lines) + "\n"


def _two_finger_gesture(landmarks: HandLandmarkSet, thresholds: GestureThresholds) -> Gesture:
    # Spread V sign versus two straight fingers side by side
    gap = distance(landmarks[LM.INDEX_TIP], landmarks[LM.MIDDLE_TIP])
    return Gesture.VICTORY if gap > thresholds.victory_spread else Gesture.TWO_FINGERS_TOGETHER


def _open_hand_gesture(landmarks: HandLandmarkSet, thresholds: GestureThresholds) -> Gesture:
    spread = average_tip_spread(landmarks)
    return Gesture.OPEN_HAND if spread > thresholds.open_hand_spread else Gesture.FIVE_TOGETHER


def match_gesture(vector: FingerExtensionVector, landmarks: HandLandmarkSet,
                  thresholds: Optional[GestureThresholds] = None) -> Gesture:
    """
    Map an extension vector to a gesture.

    Dispatch is on the extended-finger count first, then on the specific
    fingers in priority order, index finger first.

    Raises:
        UnclassifiedCombination: if the count is outside 0-5
    """
    if thresholds is None:
        thresholds = GestureThresholds()

    thumb, index, middle, ring, pinky = vector
    count = vector.extended_count

    if count == 0:
        return Gesture.CLOSED_FIST

    if count == 1:
        if index:
            return Gesture.POINTING
        if thumb:
            return Gesture.THUMBS_UP
        if middle:
            return Gesture.MIDDLE_FINGER
        if ring:
            return Gesture.RING_FINGER
        if pinky:
            return Gesture.PINKY
        return Gesture.ONE_FINGER

    if count == 2:
        if index and middle:
            return _two_finger_gesture(landmarks, thresholds)
        if thumb and index:
            return Gesture.GUN
        if thumb and pinky:
            return Gesture.SHAKA
        if index and pinky:
            return Gesture.ROCK_ON
        return Gesture.TWO_FINGERS

    if count == 3:
        if index and middle and ring:
            return Gesture.THREE_NO_THUMB
        if thumb and index and middle:
            return Gesture.THREE_WITH_THUMB
        return Gesture.THREE_FINGERS

    if count == 4:
        return Gesture.FOUR_NO_THUMB if not thumb else Gesture.FOUR_FINGERS

    if count == 5:
        return _open_hand_gesture(landmarks, thresholds)

    raise UnclassifiedCombination(count)


def classify_gesture(landmarks: HandLandmarkSet,
                     strategy: Optional[ExtensionStrategy] = None,
                     thresholds: Optional[GestureThresholds] = None) -> GestureResult:
    """
    Classify a normalized landmark set into a gesture.

    Args:
        landmarks: Mirror-corrected hand landmarks (21 points)
        strategy: Finger extension rule, defaults to DistanceRatioExtension
        thresholds: Refinement thresholds, defaults to GestureThresholds()

    Returns:
        GestureResult with the label and the decision trace
    """
    if len(landmarks) != NUM_LANDMARKS:
        return GestureResult(Gesture.INSUFFICIENT_DATA.value, "")

    if strategy is None:
        strategy = DistanceRatioExtension()

    try:
        vector = strategy.classify(landmarks)
    except InsufficientLandmarks:
        return GestureResult(Gesture.INSUFFICIENT_DATA.value, "")

    trace = build_debug_trace(vector)
    try:
        gesture = match_gesture(vector, landmarks, thresholds)
    except UnclassifiedCombination as e:
        logger.warning(f"⚠️  {e}: {tuple(vector)}")
        gesture = Gesture.UNKNOWN

    return GestureResult(gesture.value, trace)


class GestureProcessor:
    """
    Per-frame pipeline: mirror correction, finger extension, gesture rules.

    Holds configuration only; every frame is classified independently.
    """

    def __init__(self, cfg: Optional[Cfg] = None):
        """Initialize gesture processor with configuration."""
        self.cfg = cfg if cfg is not None else Cfg()
        self.strategy = extension_strategy_from_config(self.cfg.classifier)
        self.thresholds = self.cfg.gestures

    def process_hand(self, hand: Optional[DetectedHand]) -> FrameResult:
        """
        Classify one detected hand.

        Args:
            hand: Tracker output for the best-ranked hand (None if no hand detected)

        Returns:
            FrameResult with label, trace, landmark count and confidence
        """
        if hand is None:
            return FrameResult(Gesture.NO_HAND.value, "", 0, 0.0)

        landmarks = hand.landmarks
        if self.cfg.normalizer.mirror:
            landmarks = mirror_landmarks(landmarks)

        self._debug_key_points(landmarks)
        result = classify_gesture(landmarks, self.strategy, self.thresholds)
        logger.debug(f"Detected {len(landmarks)} points, gesture: {result.label}")

        return FrameResult(
            gesture_label=result.label,
            debug_trace=result.debug_trace,
            landmarks_count=len(landmarks),
            confidence=hand.confidence
        )

    def error_result(self, error: Exception) -> FrameResult:
        """Frame result reported when the detector fails."""
        return FrameResult(f"Detector error: {error}", "", 0, 0.0)

    def _debug_key_points(self, landmarks: HandLandmarkSet) -> None:
        if not logger.isEnabledFor(logging.DEBUG) or len(landmarks) != NUM_LANDMARKS:
            return
        for name, idx in (("Wrist", LM.WRIST), ("Thumb tip", LM.THUMB_TIP),
                          ("Index tip", LM.INDEX_TIP), ("Index MCP", LM.INDEX_MCP)):
            p = landmarks[idx]
            logger.debug(f"{name}: ({p.x:.3f}, {p.y:.3f})")
