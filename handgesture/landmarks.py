"""
Landmark geometry, mirror correction and finger extension rules.
"""
import math
from typing import Any, Iterable, List, Optional

from .config import ClassifierConfig
from .errors import InsufficientLandmarks
from .types import FingerExtensionVector, HandLandmarkSet, LandmarkPoint


NUM_LANDMARKS = 21


# MediaPipe landmark indices
class LM:
    WRIST = 0
    THUMB_CMC, THUMB_MCP, THUMB_IP, THUMB_TIP = 1, 2, 3, 4
    INDEX_MCP, INDEX_PIP, INDEX_DIP, INDEX_TIP = 5, 6, 7, 8
    MIDDLE_MCP, MIDDLE_PIP, MIDDLE_DIP, MIDDLE_TIP = 9, 10, 11, 12
    RING_MCP, RING_PIP, RING_DIP, RING_TIP = 13, 14, 15, 16
    PINKY_MCP, PINKY_PIP, PINKY_DIP, PINKY_TIP = 17, 18, 19, 20


# (tip, pip, mcp) for index, middle, ring, pinky
FINGER_JOINTS = [
    (LM.INDEX_TIP, LM.INDEX_PIP, LM.INDEX_MCP),
    (LM.MIDDLE_TIP, LM.MIDDLE_PIP, LM.MIDDLE_MCP),
    (LM.RING_TIP, LM.RING_PIP, LM.RING_MCP),
    (LM.PINKY_TIP, LM.PINKY_PIP, LM.PINKY_MCP),
]


def landmarks_from_xy(points: Iterable[Any]) -> List[LandmarkPoint]:
    """
    Build landmark points from raw tracker output.

    Args:
        points: (x, y) or (x, y, z) sequences, or objects exposing .x/.y/.z
            such as MediaPipe NormalizedLandmark

    Returns:
        List of LandmarkPoint in the same order
    """
    result = []
    for p in points:
        if hasattr(p, "x") and hasattr(p, "y"):
            result.append(LandmarkPoint(float(p.x), float(p.y), float(getattr(p, "z", 0.0) or 0.0)))
        else:
            z = p[2] if len(p) > 2 else None
            result.append(LandmarkPoint(float(p[0]), float(p[1]), float(z or 0.0)))
    return result


def distance(p1: LandmarkPoint, p2: LandmarkPoint) -> float:
    """Planar distance between two landmarks; z is ignored."""
    dx = p1.x - p2.x
    dy = p1.y - p2.y
    return math.sqrt(dx * dx + dy * dy)


def mirror_landmarks(landmarks: HandLandmarkSet) -> List[LandmarkPoint]:
    """Undo the horizontal flip of a front-facing camera (x -> 1 - x)."""
    return [LandmarkPoint(1.0 - p.x, p.y, p.z) for p in landmarks]


def average_tip_spread(landmarks: HandLandmarkSet) -> float:
    """Mean distance between adjacent fingertips, index through pinky."""
    tips = [LM.INDEX_TIP, LM.MIDDLE_TIP, LM.RING_TIP, LM.PINKY_TIP]
    gaps = [distance(landmarks[a], landmarks[b]) for a, b in zip(tips, tips[1:])]
    return sum(gaps) / len(gaps)


def _require_full_hand(landmarks: HandLandmarkSet) -> None:
    if len(landmarks) != NUM_LANDMARKS:
        raise InsufficientLandmarks(len(landmarks), NUM_LANDMARKS)


class DistanceRatioExtension:
    """
    Rotation tolerant extension rule.

    A finger is extended when its tip is further from the MCP joint than
    `finger_ratio` times the PIP-to-MCP distance. The thumb is extended when
    its tip is further from the wrist than its IP joint.
    """

    def __init__(self, finger_ratio: float = 1.1):
        self.finger_ratio = finger_ratio

    def classify(self, landmarks: HandLandmarkSet) -> FingerExtensionVector:
        _require_full_hand(landmarks)

        wrist = landmarks[LM.WRIST]
        thumb = distance(landmarks[LM.THUMB_TIP], wrist) > distance(landmarks[LM.THUMB_IP], wrist)

        fingers = []
        for tip_idx, pip_idx, mcp_idx in FINGER_JOINTS:
            mcp = landmarks[mcp_idx]
            tip_dist = distance(landmarks[tip_idx], mcp)
            pip_dist = distance(landmarks[pip_idx], mcp)
            fingers.append(tip_dist > self.finger_ratio * pip_dist)

        return FingerExtensionVector(thumb, *fingers)


class VerticalExtension:
    """
    Upright-hand extension rule.

    Fingers count as extended when the tip sits above the MCP joint
    (smaller y). The thumb needs both distance from the wrist and a
    horizontal offset from its MCP joint. Only reliable for an upright hand.
    """

    def __init__(self, thumb_ratio: float = 1.1, thumb_min_dx: float = 0.04):
        self.thumb_ratio = thumb_ratio
        self.thumb_min_dx = thumb_min_dx

    def classify(self, landmarks: HandLandmarkSet) -> FingerExtensionVector:
        _require_full_hand(landmarks)

        wrist = landmarks[LM.WRIST]
        thumb_tip = landmarks[LM.THUMB_TIP]
        thumb_mcp = landmarks[LM.THUMB_MCP]
        far_from_wrist = distance(thumb_tip, wrist) > distance(thumb_mcp, wrist) * self.thumb_ratio
        sideways = abs(thumb_tip.x - thumb_mcp.x) > self.thumb_min_dx

        fingers = [landmarks[tip_idx].y < landmarks[mcp_idx].y for tip_idx, _, mcp_idx in FINGER_JOINTS]

        return FingerExtensionVector(far_from_wrist and sideways, *fingers)


def extension_strategy_from_config(cfg: Optional[ClassifierConfig] = None):
    """Build the extension strategy named in the classifier config."""
    if cfg is None:
        cfg = ClassifierConfig()

    if cfg.extension_strategy == "distance_ratio":
        return DistanceRatioExtension(finger_ratio=cfg.finger_ratio)
    if cfg.extension_strategy == "vertical":
        return VerticalExtension(thumb_ratio=cfg.thumb_ratio, thumb_min_dx=cfg.thumb_min_dx)
    raise ValueError(f"Unknown extension strategy '{cfg.extension_strategy}'")
