"""Severity model adapters."""

from .linear import LinearSeverityPredictor

__all__ = ["LinearSeverityPredictor"]
