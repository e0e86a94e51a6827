from typing import Any, Dict, List, Optional


class AppError(Exception):
    """Base class for failures that map onto a client-facing status code."""

    status_code = 500

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors


class ValidationError(AppError):
    status_code = 400


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409


class ConstraintError(AppError):
    """A storage-level constraint rejected a row that passed request validation."""

    status_code = 400


class InternalError(AppError):
    status_code = 500
