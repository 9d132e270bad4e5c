"""
Shared Domain Constants.

Central location for timing thresholds and user-facing messages used across
the practice flow. Timing values are in milliseconds for consistency.
"""

# =============================================================================
# Feedback Timing (milliseconds)
# =============================================================================
# After an answer is accepted the result stays on screen before the next card.
# The continue key is only armed after a short debounce so key-repeat from the
# submitting Enter press cannot skip feedback the user has not seen yet.

FEEDBACK_DELAY_MS = 2500
SKIP_DEBOUNCE_MS = 100


# =============================================================================
# Completion Messages (Single Source of Truth)
# =============================================================================


class EncouragementMessages:
    """Messages shown on the completion screen, keyed by accuracy band."""

    PERFECT = "Perfect score!"
    GREAT = "Great job!"
    GOOD = "Good effort!"
    KEEP_GOING = "Keep practicing!"
    TRY_AGAIN = "Try again!"

    @classmethod
    def for_accuracy(cls, accuracy: float) -> str:
        """Get message for an accuracy percentage (0-100)."""
        if accuracy == 100:
            return cls.PERFECT
        if accuracy >= 80:
            return cls.GREAT
        if accuracy >= 60:
            return cls.GOOD
        if accuracy >= 40:
            return cls.KEEP_GOING
        return cls.TRY_AGAIN
