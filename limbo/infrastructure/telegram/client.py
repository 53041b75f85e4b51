"""Telegram Bot API adapter for the ChatTransport port."""

from typing import Any

import httpx

from limbo.domain.notification.port.transport import ChatTransport
from limbo.domain.shared.error import TransportError, TransportErrorKind


def classify_error(error_code: int | None, description: str) -> TransportErrorKind:
    """Map a Bot API error to a transport error kind.

    Telegram answers 403 both when the user blocked the bot
    ("Forbidden: bot was blocked by the user") and when the bot may no longer
    write to the chat ("Forbidden: user is deactivated"). Everything else,
    including rate limits, is treated as transient.
    """
    if error_code != 403:
        return TransportErrorKind.OTHER
    if "blocked" in description.lower():
        return TransportErrorKind.BLOCKED
    return TransportErrorKind.FORBIDDEN


class TelegramTransport(ChatTransport):
    """Sends messages and long-polls updates over the Telegram Bot API."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def send(self, channel_id: str, text: str) -> None:
        await self._call(
            "sendMessage",
            {"chat_id": channel_id, "text": text, "disable_web_page_preview": True},
        )

    async def get_updates(self, offset: int | None, timeout: int) -> list[dict[str, Any]]:
        """Fetch pending updates, waiting up to ``timeout`` seconds for new ones."""
        payload: dict[str, Any] = {"timeout": timeout, "allowed_updates": ["message"]}
        if offset is not None:
            payload["offset"] = offset
        # Read timeout must outlast the server-side long poll
        result = await self._call(
            "getUpdates",
            payload,
            timeout=httpx.Timeout(10.0, read=timeout + 10.0),
        )
        return result or []

    async def _call(
        self,
        method: str,
        payload: dict[str, Any],
        timeout: httpx.Timeout | None = None,
    ) -> Any:
        try:
            if timeout is None:
                response = await self._client.post(method, json=payload)
            else:
                response = await self._client.post(method, json=payload, timeout=timeout)
        except httpx.HTTPError as e:
            raise TransportError(f"{method} failed: {e!r}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.is_success and body.get("ok"):
            return body.get("result")

        error_code = body.get("error_code", response.status_code)
        description = str(body.get("description") or response.reason_phrase)
        raise TransportError(
            f"{method} failed: {error_code} {description}",
            kind=classify_error(error_code, description),
        )
