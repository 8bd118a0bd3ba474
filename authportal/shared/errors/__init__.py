from .base import (
    AppError,
    DomainError,
    HashError,
    InfrastructureError,
    RenderError,
    StoreError,
    ValidationError,
)
from .http import handle_app_error, internal_error_response, register_error_handler

__all__ = [
    "AppError",
    "DomainError",
    "HashError",
    "InfrastructureError",
    "RenderError",
    "StoreError",
    "ValidationError",
    "handle_app_error",
    "internal_error_response",
    "register_error_handler",
]
