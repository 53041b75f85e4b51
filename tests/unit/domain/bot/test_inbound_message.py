import pytest

from limbo.domain.bot.model.message import BotCommand, InboundMessage


def _message(text: str) -> InboundMessage:
    return InboundMessage(sender_channel_id="555", command_text=text, sender_identity="@anna")


class TestCommandParsing:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("/start", BotCommand.START),
            ("/START", BotCommand.START),
            ("/start@LimboGalleryBot", BotCommand.START),
            ("/start deep-link-payload", BotCommand.START),
            ("  /status  ", BotCommand.STATUS),
            ("/list", BotCommand.LIST),
        ],
    )
    def test_recognized(self, text: str, expected: BotCommand):
        assert _message(text).command == expected

    @pytest.mark.parametrize("text", ["", "   ", "start", "hello /start", "/help", "/"])
    def test_not_a_command(self, text: str):
        assert _message(text).command is None
