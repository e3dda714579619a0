"""Observability: structured logging setup."""
