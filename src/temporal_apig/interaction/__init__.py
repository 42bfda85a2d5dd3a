"""Interaction commands and the versioned callback-id codec."""

from temporal_apig.interaction.codec import (
    EncoderVersion,
    decode,
    decode_to_json_string,
    decode_with_user_data,
    encode,
    encode_default_from_json_string,
    encode_signal_no_args,
)
from temporal_apig.interaction.errors import DecodeError, UnsafeValueError
from temporal_apig.interaction.models import (
    EventKind,
    ExecuteInteraction,
    Interaction,
    QueryInteraction,
    SignalInteraction,
    SignalWithoutInput,
    with_args,
)

__all__ = [
    "DecodeError",
    "EncoderVersion",
    "EventKind",
    "ExecuteInteraction",
    "Interaction",
    "QueryInteraction",
    "SignalInteraction",
    "SignalWithoutInput",
    "UnsafeValueError",
    "decode",
    "decode_to_json_string",
    "decode_with_user_data",
    "encode",
    "encode_default_from_json_string",
    "encode_signal_no_args",
    "with_args",
]
