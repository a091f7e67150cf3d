"""
Type definitions for hand gesture classification.
"""
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Protocol, Sequence, runtime_checkable


@dataclass(frozen=True)
class LandmarkPoint:
    """A single hand landmark in normalized image coordinates."""
    x: float
    y: float
    z: float = 0.0  # relative depth, unused by the classifier


# 21 points in MediaPipe order (see landmarks.LM)
HandLandmarkSet = Sequence[LandmarkPoint]


class FingerExtensionVector(NamedTuple):
    """Which fingers are extended, in fixed thumb-to-pinky order."""
    thumb: bool
    index: bool
    middle: bool
    ring: bool
    pinky: bool

    @property
    def extended_count(self) -> int:
        return sum(1 for extended in self if extended)


@dataclass(frozen=True)
class GestureResult:
    """Gesture label plus the per-finger decision trace."""
    label: str
    debug_trace: str


@dataclass(frozen=True)
class DetectedHand:
    """A single hand produced by the landmark tracker."""
    landmarks: List[LandmarkPoint]
    confidence: float  # handedness score of the best-ranked hand
    handedness: Optional[str] = None  # "Left" / "Right"


@dataclass(frozen=True)
class FrameResult:
    """Per-frame output handed to the presentation layer."""
    gesture_label: str
    debug_trace: str
    landmarks_count: int
    confidence: float


@runtime_checkable
class ExtensionStrategy(Protocol):
    """Rule that decides which fingers are extended."""

    def classify(self, landmarks: HandLandmarkSet) -> FingerExtensionVector:
        """Return the extension vector for a 21-point landmark set."""
        ...
