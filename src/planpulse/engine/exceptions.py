"""
Exceptions raised by the scoring engine.

All engine errors inherit from EngineError so callers can catch them in one
place. Scoring functions raise instead of returning NaN or partial results.

Example:
    try:
        result = predict_completion(goal, now)
    except InvalidInputError as e:
        logger.warning("prediction_skipped", reason=e.message)
"""

from typing import Optional


class EngineError(Exception):
    """
    Base exception for all PlanPulse engine errors.

    Attributes:
        message: Human-readable description of the error.
        details: Optional additional context for debugging.
    """

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidInputError(EngineError, ValueError):
    """
    Raised when input records cannot be scored.

    Covers missing required dates, inverted date intervals, empty member
    rosters and unknown reporting periods.
    """
