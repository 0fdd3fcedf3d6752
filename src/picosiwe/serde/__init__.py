"""Serialization / deserialization (serde): structured (dict / JSON) form of a Message."""

from .json_codec import (
    message_from_dict,
    message_from_json,
    message_to_dict,
    message_to_json,
)

__all__: tuple[str, ...] = (
    "message_from_dict",
    "message_from_json",
    "message_to_dict",
    "message_to_json",
)
