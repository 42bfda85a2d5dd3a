"""Temporal API gateway.

Bridges third-party webhook callbacks (Slack interactions and the like) back to
Temporal workflows. Workflow routing metadata travels inside the callback id as a
compact, versioned string; see :mod:`temporal_apig.interaction.codec`.
"""

__version__ = "0.1.0"

from temporal_apig.interaction.codec import (
    decode_to_json_string,
    encode_default_from_json_string,
    encode_signal_no_args,
)

__all__ = [
    "__version__",
    "decode_to_json_string",
    "encode_default_from_json_string",
    "encode_signal_no_args",
]
