"""
Type-erased value container.

A ValueBox holds one serialized payload plus a diagnostic type tag. It lets
tables of unrelated row types live in one dict[str, ValueBox] and be saved as
a single blob: the box only ever sees bytes, and the caller names the type it
wants back when reading.

The tag records what was last stored ("list[Person]") for inspection only.
It is never checked on get; a payload is valid for a type exactly when the
codec can decode it as that type.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from shelfdb.codec import DEFAULT_CODEC, Codec
from shelfdb.errors import CodecError


class ValueBox(BaseModel):
    """
    One serialized payload with a diagnostic type tag.

    Invariant: payload is None exactly when type_tag is "". A box starts
    empty and only gains a payload through a successful set().

    Attributes:
        type_tag: Name of the last successfully stored type
        payload: Encoded bytes, or None if nothing was ever stored
    """

    model_config = ConfigDict(
        ser_json_bytes="base64",
        val_json_bytes="base64",
    )

    type_tag: str = Field(
        default="",
        description="Name of the last successfully stored type",
    )
    payload: bytes | None = Field(
        default=None,
        description="Codec output for the stored value",
    )

    @model_validator(mode="after")
    def validate_tag_matches_payload(self) -> "ValueBox":
        """Reject boxes where only one of tag and payload is set."""
        if (self.payload is None) != (self.type_tag == ""):
            msg = "type_tag and payload must be both set or both empty"
            raise ValueError(msg)
        return self

    @property
    def is_empty(self) -> bool:
        return self.payload is None

    @property
    def size(self) -> int:
        """Payload length in bytes (0 when empty)."""
        return len(self.payload) if self.payload is not None else 0

    def set(self, value: Any, value_type: Any = None, codec: Codec | None = None) -> bool:
        """
        Replace the stored value.

        Payload and tag are replaced together on success. On failure the box
        is left exactly as it was.

        Args:
            value: Value to store
            value_type: Type to encode as; defaults to type(value)
            codec: Codec to use; defaults to the shared JsonCodec

        Returns:
            True if the value was encoded and stored
        """
        codec = codec or DEFAULT_CODEC
        if value_type is None:
            value_type = type(value)
        try:
            payload = codec.encode(value, value_type)
        except CodecError:
            return False
        self.payload = payload
        self.type_tag = codec.type_name(value_type)
        return True

    def get(self, value_type: Any, codec: Codec | None = None) -> Any | None:
        """
        Decode the stored value as value_type.

        Returns None both when nothing was stored and when the payload does
        not decode as value_type.
        """
        if self.payload is None:
            return None
        codec = codec or DEFAULT_CODEC
        try:
            return codec.decode(self.payload, value_type)
        except CodecError:
            return None
