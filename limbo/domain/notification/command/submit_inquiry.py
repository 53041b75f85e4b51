from datetime import UTC, datetime

from limbo.domain.notification.model import DeliveryStatus, PurchaseInquiry
from limbo.domain.notification.service.dispatcher import NotificationDispatcher
from limbo.domain.shared.command import Command, CommandHandler, Result

_MESSAGES: dict[DeliveryStatus, str] = {
    DeliveryStatus.DELIVERED: "Notification delivered to the artist",
    DeliveryStatus.ARTIST_UNKNOWN: "Artist not found",
    DeliveryStatus.ARTIST_UNREGISTERED: "Artist has not registered with the bot yet",
    DeliveryStatus.DELIVERY_FAILED: "Notification delivery failed",
}


class SubmitInquiry(Command):
    inquiry: PurchaseInquiry


class InquiryResult(Result):
    success: bool
    message: str
    artist_found: bool
    timestamp: datetime


class SubmitInquiryHandler(CommandHandler[SubmitInquiry, InquiryResult]):
    dispatcher: NotificationDispatcher

    async def run(self, cmd: SubmitInquiry) -> InquiryResult:
        inquiry = cmd.inquiry
        result = await self.dispatcher.dispatch(inquiry.artist_username, inquiry)
        return InquiryResult(
            success=result.delivered,
            message=_MESSAGES[result.status],
            artist_found=result.artist_found,
            timestamp=datetime.now(UTC),
        )
