"""Notification domain models."""

from .delivery import DeliveryResult, DeliveryStatus, FailureDetail
from .inquiry import Customer, PurchaseInquiry

__all__ = [
    "Customer",
    "DeliveryResult",
    "DeliveryStatus",
    "FailureDetail",
    "PurchaseInquiry",
]
