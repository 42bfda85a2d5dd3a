"""Abstract base class for encoder version strategies."""

from abc import ABC, abstractmethod

from temporal_apig.interaction.models import Interaction

SECTION_DELIMITER = "~"
PAIR_DELIMITER = ","
KEY_DELIMITER = ":"

ENCODER_HELP_MSG = "Encoder string format: version~key:value,key:value~user_data"


class VersionStrategy(ABC):
    """Encode/decode logic owned by exactly one encoder version.

    A strategy never sees the version prefix: ``encode`` returns the body that
    follows ``version~`` and ``decode`` receives everything after it, including any
    caller-appended user data.
    """

    @abstractmethod
    def encode(self, interaction: Interaction) -> str:
        """Encode an interaction into the version's body.

        Args:
            interaction: The command to encode. Argument fields are ignored.

        Returns:
            The body string, without the version prefix.
        """
        pass

    @abstractmethod
    def decode(self, body: str) -> Interaction:
        """Decode a body produced by :meth:`encode`.

        Args:
            body: Everything after the version prefix.

        Returns:
            The interaction, with argument fields absent.

        Raises:
            DecodeError: If the body cannot be parsed.
        """
        pass

    @abstractmethod
    def emitted_values(self, interaction: Interaction) -> list[tuple[str, str]]:
        """Return ``(field_name, value)`` for every value :meth:`encode` would write."""
        pass
