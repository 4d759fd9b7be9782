"""Typed failures raised by the password guard."""

from __future__ import annotations

from typing import ClassVar


class SecurePasswordError(Exception):
    """Base class for guard failures with a stable discriminator."""

    name: ClassVar[str] = "SecurePasswordError"


class PasswordMismatchError(SecurePasswordError, ValueError):
    """Raised when a candidate password does not match the stored digest."""

    name: ClassVar[str] = "PasswordMismatchError"

    def __init__(self) -> None:
        super().__init__("password does not match")


class UnsupportedOperationError(SecurePasswordError, TypeError):
    """Raised when a guard operation is invoked on a model type without the guard."""

    name: ClassVar[str] = "UnsupportedOperationError"

    def __init__(self, *, model_name: str, operation: str) -> None:
        super().__init__(f"{model_name} does not support {operation}()")
        self.model_name = model_name
        self.operation = operation
