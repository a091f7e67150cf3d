"""
Test cases for gesture rules, decision traces and the per-frame processor.
"""
import itertools
import unittest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from handgesture.config import Cfg, GestureThresholds, load_config
from handgesture.gestures import (
    Gesture, GestureProcessor, build_debug_trace, classify_gesture, match_gesture,
)
from handgesture.landmarks import DistanceRatioExtension, VerticalExtension, mirror_landmarks
from handgesture.types import DetectedHand, FingerExtensionVector, FrameResult

from hand_fixtures import hand_from_vector, make_hand


class TestMatchGesture(unittest.TestCase):
    """Test the count-keyed decision tree."""

    def assertGesture(self, vector, expected, tip_xs=None):
        vector = FingerExtensionVector(*vector)
        self.assertEqual(match_gesture(vector, hand_from_vector(vector, tip_xs)), expected)

    def test_zero_fingers(self):
        self.assertGesture((0, 0, 0, 0, 0), Gesture.CLOSED_FIST)

    def test_one_finger(self):
        self.assertGesture((0, 1, 0, 0, 0), Gesture.POINTING)
        self.assertGesture((1, 0, 0, 0, 0), Gesture.THUMBS_UP)
        self.assertGesture((0, 0, 1, 0, 0), Gesture.MIDDLE_FINGER)
        self.assertGesture((0, 0, 0, 1, 0), Gesture.RING_FINGER)
        self.assertGesture((0, 0, 0, 0, 1), Gesture.PINKY)

    def test_two_fingers(self):
        self.assertGesture((1, 1, 0, 0, 0), Gesture.GUN)
        self.assertGesture((1, 0, 0, 0, 1), Gesture.SHAKA)
        self.assertGesture((0, 1, 0, 0, 1), Gesture.ROCK_ON)
        self.assertGesture((0, 0, 1, 1, 0), Gesture.TWO_FINGERS)
        self.assertGesture((1, 0, 1, 0, 0), Gesture.TWO_FINGERS)

    def test_two_finger_refinement(self):
        self.assertGesture((0, 1, 1, 0, 0), Gesture.VICTORY, tip_xs=(0.40, 0.50, 0.55, 0.65))
        self.assertGesture((0, 1, 1, 0, 0), Gesture.TWO_FINGERS_TOGETHER, tip_xs=(0.44, 0.47, 0.55, 0.65))

    def test_three_fingers(self):
        self.assertGesture((0, 1, 1, 1, 0), Gesture.THREE_NO_THUMB)
        self.assertGesture((1, 1, 1, 0, 0), Gesture.THREE_WITH_THUMB)
        self.assertGesture((0, 0, 1, 1, 1), Gesture.THREE_FINGERS)
        self.assertGesture((1, 0, 0, 1, 1), Gesture.THREE_FINGERS)

    def test_four_fingers(self):
        self.assertGesture((0, 1, 1, 1, 1), Gesture.FOUR_NO_THUMB)
        self.assertGesture((1, 0, 1, 1, 1), Gesture.FOUR_FINGERS)
        self.assertGesture((1, 1, 1, 1, 0), Gesture.FOUR_FINGERS)

    def test_five_finger_refinement(self):
        self.assertGesture((1, 1, 1, 1, 1), Gesture.OPEN_HAND, tip_xs=(0.365, 0.455, 0.545, 0.635))
        self.assertGesture((1, 1, 1, 1, 1), Gesture.FIVE_TOGETHER, tip_xs=(0.47, 0.49, 0.51, 0.53))

    def test_every_combination_has_a_label(self):
        for bits in itertools.product((False, True), repeat=5):
            vector = FingerExtensionVector(*bits)
            gesture = match_gesture(vector, hand_from_vector(vector))
            self.assertIsInstance(gesture, Gesture)
            self.assertTrue(gesture.value)
            self.assertNotEqual(gesture, Gesture.UNKNOWN)

    def test_custom_thresholds(self):
        vector = FingerExtensionVector(False, True, True, False, False)
        hand = hand_from_vector(vector, tip_xs=(0.40, 0.50, 0.55, 0.65))
        strict = GestureThresholds(victory_spread=0.2)
        self.assertEqual(match_gesture(vector, hand, strict), Gesture.TWO_FINGERS_TOGETHER)


class TestDebugTrace(unittest.TestCase):
    """Test the decision trace builder."""

    def test_trace_lists_fingers_and_total(self):
        trace = build_debug_trace(FingerExtensionVector(True, False, True, False, False))
        lines = trace.splitlines()
        self.assertEqual(lines[1:6], ["Thumb: ↑", "Index: ↓", "Middle: ↑", "Ring: ↓", "Pinky: ↓"])
        self.assertIn("Total extended: 2", lines)

    def test_trace_does_not_change_label(self):
        hand = make_hand(index=True)
        result = classify_gesture(hand)
        self.assertEqual(result.label, Gesture.POINTING.value)
        self.assertEqual(result.debug_trace,
                         build_debug_trace(DistanceRatioExtension().classify(hand)))


class _SevenFingers(FingerExtensionVector):
    @property
    def extended_count(self) -> int:
        return 7


class _BrokenStrategy:
    def classify(self, landmarks):
        return _SevenFingers(True, True, True, True, True)


class TestClassifyGesture(unittest.TestCase):
    """Test end-to-end classification of normalized landmarks."""

    def test_scenario_closed_fist(self):
        result = classify_gesture(make_hand())
        self.assertEqual(result.label, "Closed fist")
        self.assertIn("Total extended: 0", result.debug_trace)

    def test_scenario_pointing(self):
        result = classify_gesture(make_hand(index=True))
        self.assertEqual(result.label, "Pointing (index)")
        self.assertIn("Total extended: 1", result.debug_trace)

    def test_scenario_victory(self):
        spread = make_hand(index=True, middle=True, tip_xs=(0.40, 0.50, 0.55, 0.65))
        together = make_hand(index=True, middle=True, tip_xs=(0.44, 0.47, 0.55, 0.65))
        self.assertEqual(classify_gesture(spread).label, "Victory / peace sign")
        self.assertEqual(classify_gesture(together).label, "Two fingers together")

    def test_scenario_open_hand(self):
        spread = make_hand(True, True, True, True, True, tip_xs=(0.365, 0.455, 0.545, 0.635))
        together = make_hand(True, True, True, True, True, tip_xs=(0.47, 0.49, 0.51, 0.53))
        self.assertEqual(classify_gesture(spread).label, "Open hand")
        self.assertEqual(classify_gesture(together).label, "Five fingers together")

    def test_insufficient_data(self):
        for landmarks in (make_hand()[:20], [], make_hand() + make_hand()[:1]):
            result = classify_gesture(landmarks)
            self.assertEqual(result.label, "Insufficient data")
            self.assertEqual(result.debug_trace, "")

    def test_deterministic(self):
        hand = make_hand(thumb=True, pinky=True)
        results = {classify_gesture(hand) for _ in range(5)}
        self.assertEqual(len(results), 1)
        self.assertEqual(results.pop().label, "Shaka / hang loose")

    def test_unknown_gesture_fallback(self):
        with self.assertLogs("handgesture.gestures", level="WARNING"):
            result = classify_gesture(make_hand(), strategy=_BrokenStrategy())
        self.assertEqual(result.label, "Unknown gesture")
        self.assertTrue(result.debug_trace)

    def test_alternate_strategy(self):
        result = classify_gesture(make_hand(thumb=True, index=True), strategy=VerticalExtension())
        self.assertEqual(result.label, "Gun / L shape")


class TestGestureProcessor(unittest.TestCase):
    """Test the per-frame processor."""

    def setUp(self):
        """Set up test configuration."""
        self.cfg = load_config()
        self.processor = GestureProcessor(self.cfg)

    def test_no_hand_detected(self):
        result = self.processor.process_hand(None)
        self.assertEqual(result, FrameResult("No hand detected", "", 0, 0.0))

    def test_mirrored_hand(self):
        # Tracker output from a front camera is mirrored; distances survive the flip
        raw = mirror_landmarks(make_hand(index=True, middle=True, tip_xs=(0.40, 0.50, 0.55, 0.65)))
        result = self.processor.process_hand(DetectedHand(landmarks=raw, confidence=0.87, handedness="Right"))

        self.assertEqual(result.gesture_label, "Victory / peace sign")
        self.assertEqual(result.landmarks_count, 21)
        self.assertEqual(result.confidence, 0.87)
        self.assertIn("Total extended: 2", result.debug_trace)

    def test_mirror_disabled(self):
        cfg = Cfg()
        cfg.normalizer.mirror = False
        result = GestureProcessor(cfg).process_hand(DetectedHand(make_hand(), 0.5))
        self.assertEqual(result.gesture_label, "Closed fist")

    def test_insufficient_landmarks(self):
        result = self.processor.process_hand(DetectedHand(make_hand()[:12], 0.6))
        self.assertEqual(result.gesture_label, "Insufficient data")
        self.assertEqual(result.debug_trace, "")

    def test_vertical_strategy_from_config(self):
        cfg = Cfg()
        cfg.classifier.extension_strategy = "vertical"
        processor = GestureProcessor(cfg)
        self.assertIsInstance(processor.strategy, VerticalExtension)

    def test_error_result(self):
        result = self.processor.error_result(RuntimeError("model crashed"))
        self.assertEqual(result.gesture_label, "Detector error: model crashed")
        self.assertEqual(result.landmarks_count, 0)
        self.assertEqual(result.confidence, 0.0)


if __name__ == '__main__':
    unittest.main()
