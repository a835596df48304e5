"""Validation module for verifying matching results."""

from cleanmatch.validation.validator import (
    PlacementValidator,
    ValidationError,
    ValidationErrorType,
    ValidationResult,
)

__all__ = [
    "PlacementValidator",
    "ValidationError",
    "ValidationErrorType",
    "ValidationResult",
]
