"""
Core formatting logic for datepipe.

This package holds input normalization, format alias resolution, the date
pipe itself, and configuration handling.
"""

from datepipe.core.exceptions import (
    ConfigurationError,
    DatePipeError,
    InvalidPipeArgumentError,
)

__all__ = [
    "DatePipeError",
    "ConfigurationError",
    "InvalidPipeArgumentError",
]
