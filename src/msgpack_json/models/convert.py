"""Pydantic model support.

This module encodes Pydantic models through their JSON representation and
validates decoded value trees back into model instances, so message types
can be declared with Pydantic and carried as MessagePack.
"""

from __future__ import annotations

from typing import Optional, TypeVar

from pydantic import BaseModel, ValidationError

from ..codec.msgpack_json import MsgpackJson
from ..exceptions import DecodeError
from ..values import JsonObject, from_python

T = TypeVar("T", bound=BaseModel)

_default_codec = MsgpackJson()


def encode_model(message: BaseModel, codec: Optional[MsgpackJson] = None) -> bytes:
    """Encode a Pydantic model instance to MessagePack.

    The model is dumped in JSON mode first, so field types Pydantic serializes
    as JSON strings (datetimes, UUIDs, enums by value) travel as strings.

    Args:
        message: Pydantic model instance to encode
        codec: Codec to use (default: a codec with default configuration)

    Returns:
        MessagePack bytes of the model's JSON object

    Raises:
        EncodeError: If a dumped value cannot be represented in MessagePack

    Examples:
        ```python
        from pydantic import BaseModel, Field
        from msgpack_json import encode_model, decode_model

        class Status(BaseModel):
            vehicle_id: int = Field(ge=0, le=255)
            state: str
            active: bool

        data = encode_model(Status(vehicle_id=42, state="OPEN", active=True))
        status = decode_model(Status, data)
        ```
    """
    codec = codec if codec is not None else _default_codec
    return codec.packb(from_python(message.model_dump(mode="json")))


def decode_model(message_class: type[T], data: bytes, codec: Optional[MsgpackJson] = None) -> T:
    """Decode MessagePack data into a Pydantic model instance.

    Args:
        message_class: Pydantic model class to validate against
        data: MessagePack bytes holding exactly one object
        codec: Codec to use (default: a codec with default configuration)

    Returns:
        Validated model instance

    Raises:
        DecodeError: If the data is malformed, is not an object, or fails validation
    """
    codec = codec if codec is not None else _default_codec
    value = codec.unpackb(data)
    if not isinstance(value, JsonObject):
        raise DecodeError(
            f"Expected an object for {message_class.__name__}, got {value.value_type.value}"
        )

    try:
        return message_class.model_validate(value.to_python())
    except ValidationError as e:
        raise DecodeError(f"Failed to construct {message_class.__name__}: {e}") from e
