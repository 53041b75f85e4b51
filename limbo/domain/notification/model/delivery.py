from enum import StrEnum

from limbo.domain.artist.model import Artist
from limbo.domain.shared.model.value import ValueObject


class DeliveryStatus(StrEnum):
    DELIVERED = "delivered"
    ARTIST_UNKNOWN = "artist_unknown"
    ARTIST_UNREGISTERED = "artist_unregistered"
    DELIVERY_FAILED = "delivery_failed"


class FailureDetail(StrEnum):
    PERMANENT = "permanent"
    TRANSIENT = "transient"


class DeliveryResult(ValueObject):
    """Outcome of a single dispatch attempt."""

    status: DeliveryStatus
    detail: FailureDetail | None = None
    artist: Artist | None = None

    @property
    def delivered(self) -> bool:
        return self.status == DeliveryStatus.DELIVERED

    @property
    def artist_found(self) -> bool:
        """Whether the storefront should treat the artist as known.

        Failed deliveries report False, matching what the storefront has
        always been sent for that case.
        """
        return self.status in (DeliveryStatus.DELIVERED, DeliveryStatus.ARTIST_UNREGISTERED)
