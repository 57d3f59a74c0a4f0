"""
Exception hierarchy for shelfdb.

All shelfdb exceptions inherit from ShelfError, allowing callers to catch
all shelfdb-specific exceptions with a single except clause.

The store's public CRUD and persistence methods never let these escape:
they are raised by collaborators (codec, byte media, config loader) and
converted to a boolean or empty result at the ShelfDB boundary.

Exception Categories:
    - CodecError: A value could not be encoded or a payload decoded
    - StorageError: The byte medium failed to read or write a blob
    - ConfigError: A configuration file is invalid
"""

from dataclasses import dataclass, field
from typing import Any


# =============================================================================
# Error Codes
# =============================================================================

# Codec errors: 1xxx
ERROR_CODEC_ENCODE = 1001
ERROR_CODEC_DECODE = 1002
ERROR_CODEC_UNSUPPORTED_TYPE = 1003

# Storage errors: 2xxx
ERROR_STORAGE_READ = 2001
ERROR_STORAGE_WRITE = 2002
ERROR_STORAGE_NO_LOCATION = 2003

# Config errors: 3xxx
ERROR_CONFIG_INVALID = 3001


# =============================================================================
# Base Exception
# =============================================================================


@dataclass
class ShelfError(Exception):
    """
    Base exception for all shelfdb errors.

    Attributes:
        message: Human-readable error description
        code: Numeric error code for programmatic handling
        suggestion: Optional hint for how to resolve the error
        context: Optional dict with additional debugging info
    """

    message: str = ""
    code: int = 0
    suggestion: str | None = None
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Format error for display."""
        parts = [f"[E{self.code}] {self.message}"]
        if self.suggestion:
            parts.append(f"\nSuggestion: {self.suggestion}")
        return "".join(parts)

    def __repr__(self) -> str:
        """Format error for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code}, "
            f"context={self.context!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "suggestion": self.suggestion,
            "context": self.context,
        }


# =============================================================================
# Codec Errors
# =============================================================================


@dataclass
class CodecError(ShelfError):
    """
    Base class for serialization errors.

    Attributes:
        type_name: Name of the type being encoded or decoded
        underlying_error: Message of the error raised by the codec backend
    """

    type_name: str = ""
    underlying_error: str = ""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        self.context.update({
            "type_name": self.type_name,
            "underlying_error": self.underlying_error,
        })


@dataclass
class EncodeError(CodecError):
    """Raised when a value cannot be serialized."""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"Cannot encode {self.type_name}: {self.underlying_error}"
        if self.code == 0:
            self.code = ERROR_CODEC_ENCODE
        super().__post_init__()


@dataclass
class UnsupportedTypeError(EncodeError):
    """Raised when the codec has no schema for a type at all."""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"Unsupported type: {self.type_name}"
        if self.code == 0:
            self.code = ERROR_CODEC_UNSUPPORTED_TYPE
        if not self.suggestion:
            self.suggestion = "Use a pydantic model, a dataclass, or a builtin type"
        super().__post_init__()


@dataclass
class DecodeError(CodecError):
    """Raised when a payload cannot be decoded as the requested type."""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"Cannot decode payload as {self.type_name}: {self.underlying_error}"
        if self.code == 0:
            self.code = ERROR_CODEC_DECODE
        super().__post_init__()


# =============================================================================
# Storage Errors
# =============================================================================


@dataclass
class StorageError(ShelfError):
    """
    Base class for byte medium errors.

    Attributes:
        location: Where the blob was being read from or written to
        operation: The operation that failed ("read" or "write")
    """

    location: str = ""
    operation: str = ""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        self.context.update({
            "location": self.location,
            "operation": self.operation,
        })


@dataclass
class StorageReadError(StorageError):
    """Raised when a blob cannot be read."""

    underlying_error: str = ""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"Read failed at {self.location}: {self.underlying_error}"
        if self.code == 0:
            self.code = ERROR_STORAGE_READ
        if not self.operation:
            self.operation = "read"
        super().__post_init__()
        self.context["underlying_error"] = self.underlying_error


@dataclass
class StorageWriteError(StorageError):
    """Raised when a blob cannot be written."""

    underlying_error: str = ""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"Write failed at {self.location}: {self.underlying_error}"
        if self.code == 0:
            self.code = ERROR_STORAGE_WRITE
        if not self.operation:
            self.operation = "write"
        super().__post_init__()
        self.context["underlying_error"] = self.underlying_error


@dataclass
class StorageLocationError(StorageError):
    """Raised when save or load is called with no location configured."""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"No storage location for {self.operation or 'operation'}"
        if self.code == 0:
            self.code = ERROR_STORAGE_NO_LOCATION
        if not self.suggestion:
            self.suggestion = "Pass a path or construct the store with one"
        super().__post_init__()


# =============================================================================
# Config Errors
# =============================================================================


@dataclass
class ConfigError(ShelfError):
    """Raised when a configuration file cannot be parsed or validated."""

    path: str = ""
    underlying_error: str = ""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            source = self.path or "<string>"
            self.message = f"Invalid configuration in {source}: {self.underlying_error}"
        if self.code == 0:
            self.code = ERROR_CONFIG_INVALID
        self.context.update({
            "path": self.path,
            "underlying_error": self.underlying_error,
        })
