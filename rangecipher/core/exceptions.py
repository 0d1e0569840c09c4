from typing import Any


class CipherError(Exception):
    """Base exception for all cipher errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(CipherError):
    """Raised when input validation fails."""

    pass


class InvalidRangeSetError(ValidationError):
    """Raised when a set of code point boundaries cannot form ranges."""

    pass


class InvalidKeyError(ValidationError):
    """Raised when a cipher key is malformed or not invertible."""

    pass


class TextTooLongError(ValidationError):
    """Raised when input text exceeds maximum length."""

    def __init__(self, length: int, max_length: int):
        super().__init__(
            f"Text length {length} exceeds maximum {max_length}",
            {"length": length, "max_length": max_length},
        )


class EngineError(CipherError):
    """Base exception for cipher engine errors."""

    pass


class EngineNotFoundError(EngineError):
    """Raised when requested cipher engine is not found."""

    def __init__(self, engine_name: str):
        super().__init__(
            f"Cipher engine '{engine_name}' not found",
            {"engine_name": engine_name},
        )
