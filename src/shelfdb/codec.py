"""
Serialization codecs for shelfdb.

A codec turns a structured value into bytes and back, given the type the
caller expects. The store never inspects payload bytes itself: every table
payload and the whole-store blob pass through a Codec.

JsonCodec is the default. It builds a pydantic TypeAdapter per type, so any
type pydantic can describe works as a row type: BaseModel subclasses,
dataclasses, TypedDicts, enums and builtin containers.

Why ABC over Protocol?
    - Codecs are swapped as whole objects on the store, nominal typing is clearer
    - The base class carries the shared type_name helper
"""

from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any, get_args, get_origin

from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from shelfdb.errors import DecodeError, EncodeError, UnsupportedTypeError


class Codec(ABC):
    """
    Abstract base class for value codecs.

    Implementations raise EncodeError / DecodeError for expected failures;
    callers inside the store convert those to boolean results.
    """

    @abstractmethod
    def encode(self, value: Any, value_type: Any = None) -> bytes:
        """
        Serialize a value.

        Args:
            value: The value to serialize
            value_type: Type to serialize as; defaults to type(value)

        Returns:
            The encoded bytes

        Raises:
            EncodeError: If the value cannot be serialized
        """

    @abstractmethod
    def decode(self, payload: bytes, value_type: Any) -> Any:
        """
        Deserialize a payload as the given type.

        Raises:
            DecodeError: If the payload is malformed or does not match the type
        """

    def type_name(self, value_type: Any) -> str:
        """Return a readable name for a type, e.g. "list[Person]"."""
        origin = get_origin(value_type)
        if origin is not None:
            args = ", ".join(self.type_name(arg) for arg in get_args(value_type))
            return f"{getattr(origin, '__name__', repr(origin))}[{args}]"
        return getattr(value_type, "__name__", repr(value_type))


@lru_cache(maxsize=256)
def _adapter(value_type: Any) -> TypeAdapter:
    return TypeAdapter(value_type)


class JsonCodec(Codec):
    """
    JSON codec backed by pydantic TypeAdapter.

    Attributes:
        strict: Validate decoded payloads in pydantic strict mode, so a payload
            written for one type is not silently coerced into another.
    """

    def __init__(self, strict: bool = True) -> None:
        self.strict = strict

    def _get_adapter(self, value_type: Any) -> TypeAdapter:
        try:
            return _adapter(value_type)
        except (PydanticSchemaGenerationError, TypeError) as e:
            raise UnsupportedTypeError(
                type_name=self.type_name(value_type),
                underlying_error=str(e),
            ) from e

    def encode(self, value: Any, value_type: Any = None) -> bytes:
        """
        Serialize value as JSON, rejecting values that don't fit value_type.

        The encoded bytes are validated back as value_type before they are
        returned, so every payload this codec produces also decodes.
        """
        if value_type is None:
            value_type = type(value)
        adapter = self._get_adapter(value_type)
        try:
            payload = adapter.dump_json(value, warnings="error")
        except (PydanticSerializationError, TypeError, ValueError) as e:
            raise EncodeError(
                type_name=self.type_name(value_type),
                underlying_error=str(e),
            ) from e
        try:
            adapter.validate_json(payload, strict=self.strict)
        except ValidationError as e:
            raise EncodeError(
                type_name=self.type_name(value_type),
                underlying_error=f"{e.error_count()} validation error(s)",
            ) from e
        return payload

    def decode(self, payload: bytes, value_type: Any) -> Any:
        """Parse and validate a JSON payload as value_type."""
        try:
            adapter = self._get_adapter(value_type)
        except UnsupportedTypeError as e:
            raise DecodeError(
                type_name=e.type_name,
                underlying_error=e.underlying_error,
            ) from e
        try:
            return adapter.validate_json(payload, strict=self.strict)
        except ValidationError as e:
            raise DecodeError(
                type_name=self.type_name(value_type),
                underlying_error=f"{e.error_count()} validation error(s)",
            ) from e

    def __repr__(self) -> str:
        return f"JsonCodec(strict={self.strict})"


DEFAULT_CODEC = JsonCodec()
