"""Exception hierarchy shared by the decoder, validator and generator."""

from enum import Enum
from pathlib import Path
from typing import Optional


class AsmdError(Exception):
    """Base class for all asmdgen errors."""


class DecodeError(AsmdError):
    """Error while decoding a description payload into the model."""

    def __init__(
        self, message: str, file_path: Optional[Path] = None, line: Optional[int] = None
    ):
        self.file_path = file_path
        self.line = line
        super().__init__(self._format_message(message))

    def _format_message(self, message: str) -> str:
        """Format error message with file and line information."""
        parts = []
        if self.file_path:
            parts.append(f"File: {self.file_path}")
        if self.line is not None:
            parts.append(f"Line: {self.line}")
        parts.append(message)
        return " | ".join(parts)


class ValidationErrorKind(str, Enum):
    """Which description invariant was violated."""

    MISSING_MODULE_NAME = "missing-module-name"
    INVALID_MODULE_NAME = "invalid-module-name"
    INVALID_CLOCK_TYPE = "invalid-clock-type"
    MISSING_FIRST_STATE = "missing-first-state"
    NO_INPUTS = "no-inputs"
    RESERVED_PORT_NAME = "reserved-port-name"
    DUPLICATE_PORT = "duplicate-port"
    INVALID_NAME = "invalid-name"


class ValidationError(AsmdError):
    """A decoded description violates one of the model invariants."""

    def __init__(self, kind: ValidationErrorKind, message: str):
        self.kind = kind
        super().__init__(message)


class RenderError(AsmdError):
    """Emission reached an inconsistent state or the output sink failed."""
