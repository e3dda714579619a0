"""Custom exception hierarchy for the performance core."""


class PerformanceError(Exception):
    """Base exception for all performance core errors."""


# --- Configuration ---
class ConfigError(PerformanceError):
    """Invalid or missing configuration."""


# --- Domain ---
class DomainError(PerformanceError):
    """A domain rule was violated."""


class InvalidAssessmentError(DomainError):
    """Assessment input or computed score failed validation."""


class InvalidFactError(DomainError):
    """A domain fact was rejected by the event log."""

    def __init__(self, reason: str, fact: object = None):
        self.reason = reason
        self.fact = fact
        super().__init__(f"Invalid fact: {reason}")
