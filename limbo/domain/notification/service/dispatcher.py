import logging

from limbo.domain.artist.service.registry import ArtistRegistry
from limbo.domain.notification.model import (
    DeliveryResult,
    DeliveryStatus,
    FailureDetail,
    PurchaseInquiry,
)
from limbo.domain.notification.port.transport import ChatTransport
from limbo.domain.notification.util.render import render_inquiry
from limbo.domain.shared.error import TransportError
from limbo.domain.shared.service import Service

logger = logging.getLogger(__name__)


class NotificationDispatcher(Service):
    """Delivers purchase inquiries to the artist's chat.

    Makes exactly one send attempt per inquiry. A permanent transport failure
    (the artist blocked or removed the bot) clears the artist's recipient so
    later inquiries report the artist as unregistered instead of failing again.
    """

    registry: ArtistRegistry
    transport: ChatTransport

    async def dispatch(self, username: str, inquiry: PurchaseInquiry) -> DeliveryResult:
        artist = self.registry.find_by_username(username)
        if artist is None:
            logger.info("Artist %s not found", username)
            return DeliveryResult(status=DeliveryStatus.ARTIST_UNKNOWN)

        if artist.recipient_id is None:
            logger.info("Artist %s has not registered with the bot", artist.name)
            return DeliveryResult(status=DeliveryStatus.ARTIST_UNREGISTERED, artist=artist)

        text = render_inquiry(inquiry, artist_name=artist.name)

        try:
            await self.transport.send(artist.recipient_id, text)
        except TransportError as e:
            if not e.permanent:
                logger.warning("Transient delivery failure for %s: %s", artist.name, e)
                return DeliveryResult(
                    status=DeliveryStatus.DELIVERY_FAILED,
                    detail=FailureDetail.TRANSIENT,
                    artist=artist,
                )

            logger.warning(
                "Artist %s is unreachable (%s), clearing recipient", artist.name, e.kind.value
            )
            invalidation = await self.registry.invalidate(
                artist.username, recipient_id=artist.recipient_id
            )
            return DeliveryResult(
                status=DeliveryStatus.DELIVERY_FAILED,
                detail=FailureDetail.PERMANENT,
                artist=invalidation.artist,
            )

        logger.info("Inquiry delivered to %s", artist.name)
        return DeliveryResult(status=DeliveryStatus.DELIVERED, artist=artist)
