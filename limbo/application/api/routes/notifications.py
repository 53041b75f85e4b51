"""Purchase inquiry REST routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from limbo.domain.notification.command.submit_inquiry import (
    InquiryResult,
    SubmitInquiry,
    SubmitInquiryHandler,
)
from limbo.domain.notification.model import PurchaseInquiry

router = APIRouter(tags=["Notifications"], route_class=DishkaRoute)


@router.post("/notification", response_model=InquiryResult)
async def submit_notification(
    body: PurchaseInquiry,
    handler: FromDishka[SubmitInquiryHandler],
) -> InquiryResult:
    return await handler.run(SubmitInquiry(inquiry=body))
