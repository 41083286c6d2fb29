"""
Core module initialization.
Exports configuration, logging utilities and domain errors.
"""

from aroma.core.config import get_settings, Settings, EnvironmentMode
from aroma.core.errors import (
    AromaError,
    NotFoundError,
    ValidationFailure,
    ConflictError,
    UpstreamFailure,
    AuthenticationError,
    InvalidIdError,
)

__all__ = [
    "get_settings",
    "Settings",
    "EnvironmentMode",
    "AromaError",
    "NotFoundError",
    "ValidationFailure",
    "ConflictError",
    "UpstreamFailure",
    "AuthenticationError",
    "InvalidIdError",
]
