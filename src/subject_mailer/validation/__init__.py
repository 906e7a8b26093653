"""
Schema validation gates.

- schema.py: validate_subject (user input) and validate_analysis (model output)
- exceptions.py: ValidationError
"""

from .exceptions import ValidationError
from .schema import SUBJECT_MAX_LENGTH, validate_analysis, validate_subject

__all__ = [
    "ValidationError",
    "validate_subject",
    "validate_analysis",
    "SUBJECT_MAX_LENGTH",
]
