"""
Domain errors raised at the engine boundary.

The numeric core clamps rather than rejects; these are raised where a
caller hands the engine input that has no sensible interpretation.
"""


class PraxisError(ValueError):
    """Base class for all praxis-engine domain errors."""


class InvalidReadinessInput(PraxisError):
    """A readiness sub-score fell outside the 1–5 scale."""


class InvalidTrainingDayCount(PraxisError):
    """Weekly training-day count outside the supported 3–7 range."""


class UnknownExerciseError(PraxisError):
    """An exercise id was referenced that the catalog does not contain."""
