"""
Domain Errors

Exceptions raised by repositories and services. The web layer maps each
one to an HTTP response in aroma.main, so nothing below the routes needs
to know about status codes beyond the hint carried on the class.
"""

from typing import Any, Optional


class AromaError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500

    def __init__(self, message: str, detail: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class NotFoundError(AromaError):
    """An entity id (or name) does not resolve."""

    status_code = 404

    def __init__(self, entity: str, identifier: Optional[str] = None):
        message = f"{entity} not found"
        super().__init__(message, detail=identifier)
        self.entity = entity


class ValidationFailure(AromaError):
    """
    Input failed validation before any persistence call.

    Attributes:
        errors: list of {"field": ..., "message": ...} entries
    """

    status_code = 422

    def __init__(self, errors: list[dict[str, str]]):
        super().__init__("Validation failed", detail=errors)
        self.errors = errors

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationFailure":
        return cls([{"field": field, "message": message}])


class ConflictError(AromaError):
    """A uniqueness rule would be violated."""

    status_code = 400

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class UpstreamFailure(AromaError):
    """Image storage or email transport failed."""

    status_code = 502

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class AuthenticationError(AromaError):
    """Missing, invalid or expired admin credentials."""

    status_code = 401


class InvalidIdError(ValidationFailure):
    """A path or body id is not a valid ObjectId."""

    status_code = 400

    def __init__(self, field: str = "id"):
        super().__init__([{"field": field, "message": "Invalid id"}])
        self.message = "Invalid id"


class MissingFieldError(ValidationFailure):
    """A field the operation cannot proceed without is absent."""

    status_code = 400

    def __init__(self, field: str):
        super().__init__([{"field": field, "message": f"Missing {field}"}])
        self.message = f"Missing {field}"
