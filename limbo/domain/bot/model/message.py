from enum import StrEnum

from limbo.domain.shared.model.value import ValueObject


class BotCommand(StrEnum):
    START = "start"
    STATUS = "status"
    LIST = "list"


class InboundMessage(ValueObject):
    """A chat message addressed to the bot.

    ``sender_identity`` is the sender's ``@username`` or None when the sender
    has not set one. ``sender_channel_id`` is where replies go.
    """

    sender_channel_id: str
    command_text: str
    sender_identity: str | None = None

    @property
    def command(self) -> BotCommand | None:
        """Parse ``/start``, ``/start@SomeBot`` or ``/start payload`` into a command."""
        parts = self.command_text.strip().split(maxsplit=1)
        if not parts or not parts[0].startswith("/"):
            return None
        name = parts[0][1:].split("@", 1)[0].lower()
        try:
            return BotCommand(name)
        except ValueError:
            return None
