"""Exceptions raised by the generator."""

from __future__ import annotations


class GeneratorError(Exception):
    """Base exception for generation failures."""

    def __init__(self, message: str, source: str | None = None) -> None:
        self.source = source
        full_message = message if not source else f"[{source}] {message}"
        super().__init__(full_message)


class SpecificationError(GeneratorError):
    """Raised when the API document cannot be read or parsed."""

    def __init__(self, message: str, spec_path: str | None = None) -> None:
        self.spec_path = spec_path
        super().__init__(message, spec_path)


class EmissionError(GeneratorError):
    """Raised when a generated unit cannot be written."""

    def __init__(self, message: str, target_path: str | None = None) -> None:
        self.target_path = target_path
        super().__init__(message, target_path)
