"""
Live gesture recognition over a stream of camera frames.
"""
import logging
import threading
from typing import Any, Optional

from .gestures import READY_LABEL, GestureProcessor
from .types import FrameResult

logger = logging.getLogger(__name__)


class LiveGestureRecognizer:
    """
    Runs the tracker and gesture processor on incoming frames.

    At most one inference runs at a time. Frames submitted while an
    inference is in flight are dropped, not queued; `latest` always holds
    the most recent result.
    """

    def __init__(self, tracker: Any, processor: Optional[GestureProcessor] = None):
        """
        Initialize the recognizer.

        Args:
            tracker: Object with process(frame) -> Optional[DetectedHand] and close()
            processor: Gesture processor, defaults to one built from default config
        """
        self.tracker = tracker
        self.processor = processor if processor is not None else GestureProcessor()
        self.dropped_frames = 0
        self._busy = threading.Lock()
        self._result_lock = threading.Lock()
        self._latest = FrameResult(READY_LABEL, "", 0, 0.0)

    @property
    def latest(self) -> FrameResult:
        with self._result_lock:
            return self._latest

    def submit(self, frame) -> Optional[FrameResult]:
        """
        Classify a frame unless another one is still being processed.

        Args:
            frame: BGR image handed to the tracker

        Returns:
            FrameResult for this frame, or None if the frame was dropped
        """
        if not self._busy.acquire(blocking=False):
            with self._result_lock:
                self.dropped_frames += 1
            logger.debug(f"Inference in flight, dropped frame ({self.dropped_frames} total)")
            return None

        try:
            try:
                hand = self.tracker.process(frame)
            except Exception as e:
                logger.error(f"❌ Hand detector failed: {e}")
                result = self.processor.error_result(e)
            else:
                result = self.processor.process_hand(hand)

            with self._result_lock:
                self._latest = result
            return result
        finally:
            self._busy.release()

    def close(self) -> None:
        """Release the tracker."""
        self.tracker.close()

    def __enter__(self) -> "LiveGestureRecognizer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
