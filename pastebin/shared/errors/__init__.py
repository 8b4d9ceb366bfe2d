from .base import (
    AppError,
    DomainError,
    DuplicateError,
    InfrastructureError,
    NotFoundError,
    StorageError,
    UnauthorizedError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "DomainError",
    "DuplicateError",
    "InfrastructureError",
    "NotFoundError",
    "StorageError",
    "UnauthorizedError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
