"""Versioned callback-id codec.

An encoded callback id always starts with an encoder version and a ``~``. The
version selects the strategy that owns the rest of the string, so ids issued by
an older version stay decodable after a newer one becomes the default.

Adding a version means adding an :class:`EncoderVersion` member and a strategy
in ``_STRATEGIES``; existing strategies are never touched.
"""

from __future__ import annotations

import logging
from enum import Enum

from temporal_apig.interaction.errors import (
    DecodeError,
    MalformedVersionError,
    UnknownVersionError,
    UnsafeValueError,
)
from temporal_apig.interaction.models import (
    Interaction,
    SignalWithoutInput,
    interaction_to_json,
    parse_interaction_json,
)
from temporal_apig.interaction.strategy import (
    ENCODER_HELP_MSG,
    KEY_DELIMITER,
    PAIR_DELIMITER,
    SECTION_DELIMITER,
    VersionStrategy,
)
from temporal_apig.interaction.version_a import VersionA

logger = logging.getLogger(__name__)

RESERVED_CHARACTERS: tuple[str, ...] = (SECTION_DELIMITER, PAIR_DELIMITER, KEY_DELIMITER)


class EncoderVersion(str, Enum):
    """Registered encoder versions, ordered by tag."""

    A = "A"

    def __str__(self) -> str:
        return self.value


_STRATEGIES: dict[EncoderVersion, VersionStrategy] = {
    EncoderVersion.A: VersionA(),
}


def default_version() -> EncoderVersion:
    return EncoderVersion.A


def strategy_for(version: EncoderVersion) -> VersionStrategy:
    try:
        return _STRATEGIES[version]
    except KeyError:
        raise UnknownVersionError(str(version)) from None


def check_delimiter_safe(interaction: Interaction, version: EncoderVersion | None = None) -> None:
    """Raise :class:`UnsafeValueError` if any encoded value contains a delimiter."""

    strategy = strategy_for(version or default_version())
    for field, value in strategy.emitted_values(interaction):
        if any(ch in value for ch in RESERVED_CHARACTERS):
            raise UnsafeValueError(field, value)


def encode(
    interaction: Interaction,
    version: EncoderVersion | None = None,
    *,
    strict: bool = False,
) -> str:
    """Encode an interaction into a callback id.

    Argument fields are never encoded. Callers may append ``~`` plus their own data
    to the result.

    Args:
        interaction: The command to encode.
        version: Encoder version to use (defaults to :func:`default_version`).
        strict: Reject values containing ``~``, ``,`` or ``:`` instead of producing
            a string that will not decode.

    Raises:
        UnsafeValueError: Only when ``strict`` is set.
    """

    version = version or default_version()
    if strict:
        check_delimiter_safe(interaction, version)
    body = strategy_for(version).encode(interaction)
    return f"{version.value}{SECTION_DELIMITER}{body}"


def version_of(encoded: str) -> tuple[EncoderVersion, str]:
    """Split off and resolve the version tag.

    Returns:
        The version and everything after the first ``~``.
    """

    version_str, sep, rest = encoded.partition(SECTION_DELIMITER)
    if not sep:
        raise MalformedVersionError(
            f"Malformed version in encoder string. {ENCODER_HELP_MSG}", encoded=encoded
        )
    try:
        version = EncoderVersion(version_str)
    except ValueError:
        raise UnknownVersionError(version_str, encoded=encoded) from None
    return version, rest


def decode(encoded: str) -> Interaction:
    """Decode a callback id into an interaction with argument fields absent.

    User data appended after the routing section is dropped; see
    :func:`decode_with_user_data`.

    Raises:
        DecodeError: One of its subclasses, describing why the string is invalid.
    """

    version, rest = version_of(encoded)
    try:
        return strategy_for(version).decode(rest)
    except DecodeError as exc:
        if exc.encoded is None:
            exc.encoded = encoded
        raise


def split_user_data(encoded: str) -> tuple[str, str | None]:
    """Split ``version~routing~user_data`` into the callback id and the user data."""

    version_str, sep, rest = encoded.partition(SECTION_DELIMITER)
    if not sep:
        raise MalformedVersionError(
            f"Malformed version in encoder string. {ENCODER_HELP_MSG}", encoded=encoded
        )
    routing, user_sep, user_data = rest.partition(SECTION_DELIMITER)
    if not user_sep:
        return encoded, None
    return f"{version_str}{SECTION_DELIMITER}{routing}", user_data


def decode_with_user_data(encoded: str) -> tuple[Interaction, str | None]:
    routing, user_data = split_user_data(encoded)
    return decode(routing), user_data


def encode_default_from_json_string(json_string: str | bytes) -> str:
    """Encode an interaction given as JSON with the default version.

    Raises:
        pydantic.ValidationError: If the JSON does not describe an interaction.
    """

    return encode(parse_interaction_json(json_string))


def decode_to_json_string(encoded: str) -> str:
    return interaction_to_json(decode(encoded))


def encode_signal_no_args(
    signal: SignalWithoutInput, version: EncoderVersion | None = None
) -> str:
    """Encode signal routing metadata for embedding into a webhook event.

    Example: use the result as the ``callback_id`` of a Slack interaction. When the
    gateway receives the event it decodes the id and signals the workflow with the
    event as input.
    """

    return encode(signal.to_signal(), version)
