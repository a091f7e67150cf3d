"""
Hand landmark detection using MediaPipe.
"""
import logging
import os
from typing import Optional

import cv2
import numpy as np

from .config import TrackerConfig
from .landmarks import landmarks_from_xy
from .types import DetectedHand

logger = logging.getLogger(__name__)


class HandsTracker:
    """
    Hand landmark tracker using MediaPipe.

    Uses `mp.solutions.hands` when the installed MediaPipe provides it and
    falls back to the Tasks HandLandmarker, which needs a `.task` model file.
    The tracker owns the model; release it with close() or a `with` block.
    """

    def __init__(self, max_num_hands: int = 1, min_detection_conf: float = 0.7,
                 min_presence_conf: float = 0.7, min_tracking_conf: float = 0.5,
                 static_image_mode: bool = False,
                 model_asset_path: str = "models/hand_landmarker.task"):
        """
        Initialize the hands tracker.

        Args:
            max_num_hands: Maximum number of hands to detect
            min_detection_conf: Minimum confidence for hand detection
            min_presence_conf: Minimum hand presence score (Tasks API only)
            min_tracking_conf: Minimum confidence for hand tracking
            static_image_mode: Treat every frame as an unrelated image
            model_asset_path: HandLandmarker model for the Tasks API fallback
        """
        import mediapipe as mp  # type: ignore

        self._mp = mp
        self._hands = None
        self._landmarker = None
        self._timestamp_ms = 0
        self.static_image_mode = static_image_mode

        if hasattr(mp, "solutions"):
            self._hands = mp.solutions.hands.Hands(
                static_image_mode=static_image_mode,
                max_num_hands=max_num_hands,
                min_detection_confidence=min_detection_conf,
                min_tracking_confidence=min_tracking_conf
            )
            logger.info("✅ MediaPipe Hands initialized")
        else:
            try:
                self._landmarker = self._create_landmarker(
                    model_asset_path, max_num_hands, min_detection_conf,
                    min_presence_conf, min_tracking_conf
                )
            except FileNotFoundError as e:
                raise RuntimeError(
                    "MediaPipe does not provide `mp.solutions`, so the Tasks HandLandmarker is used.\n"
                    f"It needs a model file on disk: {model_asset_path}"
                ) from e
            logger.info(f"✅ MediaPipe HandLandmarker initialized from {model_asset_path}")

    @classmethod
    def from_config(cls, cfg: TrackerConfig, static_image_mode: bool = False) -> "HandsTracker":
        """Create a tracker from the tracker section of the configuration."""
        return cls(
            max_num_hands=cfg.max_num_hands,
            min_detection_conf=cfg.min_detection_confidence,
            min_presence_conf=cfg.min_presence_confidence,
            min_tracking_conf=cfg.min_tracking_confidence,
            static_image_mode=static_image_mode,
            model_asset_path=cfg.model_asset_path
        )

    def _create_landmarker(self, model_asset_path: str, max_num_hands: int,
                           min_detection_conf: float, min_presence_conf: float,
                           min_tracking_conf: float):
        from mediapipe.tasks.python import BaseOptions  # type: ignore
        from mediapipe.tasks.python.vision import (  # type: ignore
            HandLandmarker, HandLandmarkerOptions, RunningMode,
        )

        if not os.path.exists(model_asset_path):
            raise FileNotFoundError(f"HandLandmarker model not found: {model_asset_path}")

        options = HandLandmarkerOptions(
            base_options=BaseOptions(model_asset_path=model_asset_path),
            running_mode=RunningMode.IMAGE if self.static_image_mode else RunningMode.VIDEO,
            num_hands=max_num_hands,
            min_hand_detection_confidence=min_detection_conf,
            min_hand_presence_confidence=min_presence_conf,
            min_tracking_confidence=min_tracking_conf
        )
        return HandLandmarker.create_from_options(options)

    def process(self, frame_bgr: np.ndarray) -> Optional[DetectedHand]:
        """
        Process a frame and return the best-ranked hand.

        Args:
            frame_bgr: Input frame in BGR format

        Returns:
            DetectedHand with 21 landmarks in [0..1] range, or None if no hand detected
        """
        # Convert BGR to RGB for MediaPipe
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)

        if self._hands is not None:
            results = self._hands.process(frame_rgb)
            if not results.multi_hand_landmarks:
                return None

            label, score = None, 0.0
            handedness = results.multi_handedness or []
            if handedness and handedness[0].classification:
                c = handedness[0].classification[0]
                label, score = c.label, float(c.score)

            return DetectedHand(
                landmarks=landmarks_from_xy(results.multi_hand_landmarks[0].landmark),
                confidence=score,
                handedness=label
            )

        mp_image = self._mp.Image(image_format=self._mp.ImageFormat.SRGB, data=frame_rgb)
        if self.static_image_mode:
            result = self._landmarker.detect(mp_image)
        else:
            # VIDEO mode requires monotonically increasing timestamps
            self._timestamp_ms += 33
            result = self._landmarker.detect_for_video(mp_image, self._timestamp_ms)

        if not result.hand_landmarks:
            return None

        label, score = None, 0.0
        if result.handedness and result.handedness[0]:
            category = result.handedness[0][0]
            label, score = category.category_name, float(category.score)

        return DetectedHand(
            landmarks=landmarks_from_xy(result.hand_landmarks[0]),
            confidence=score,
            handedness=label
        )

    def close(self) -> None:
        """Release the MediaPipe model."""
        if self._hands is not None:
            self._hands.close()
            self._hands = None
        if self._landmarker is not None:
            self._landmarker.close()
            self._landmarker = None

    def __enter__(self) -> "HandsTracker":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
