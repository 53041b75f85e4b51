"""Port for sending chat messages to artists."""

from abc import abstractmethod
from typing import Protocol

from limbo.domain.shared.port import Port


class ChatTransport(Port, Protocol):
    """Delivers plain-text messages to a chat channel."""

    @abstractmethod
    async def send(self, channel_id: str, text: str) -> None:
        """Send ``text`` to ``channel_id``.

        Raises:
            TransportError: Delivery failed. ``kind`` tells whether the
                recipient blocked or removed the channel.
        """
        ...
