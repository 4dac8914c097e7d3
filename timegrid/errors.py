from __future__ import annotations


class InvalidInput(ValueError):
    """Raised for malformed date, time, month or timestamp strings."""

    def __init__(self, message: str, value=None):
        super().__init__(message)
        self.value = value
