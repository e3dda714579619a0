"""Performance scoring and domain-fact recording for the HR services."""

__version__ = "0.1.0"
