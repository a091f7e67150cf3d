"""
Exceptions raised by the gesture classification pipeline.
"""


class GestureError(Exception):
    """Base class for gesture classification errors."""


class InsufficientLandmarks(GestureError, ValueError):
    """Raised when a landmark set does not hold exactly 21 points."""

    def __init__(self, count: int, expected: int = 21):
        super().__init__(f"Expected {expected} landmarks, got {count}")
        self.count = count
        self.expected = expected


class UnclassifiedCombination(GestureError):
    """Raised when an extended-finger count falls outside the rule table."""

    def __init__(self, extended_count: int):
        super().__init__(f"No gesture rule for {extended_count} extended fingers")
        self.extended_count = extended_count
