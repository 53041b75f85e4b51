from decimal import Decimal
from typing import Annotated

from pydantic import ConfigDict, StringConstraints, field_validator
from pydantic.alias_generators import to_camel

from limbo.domain.shared.model.value import ValueObject

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def _number_as_text(value: object) -> object:
    # Storefront forms send phone numbers and titles as JSON numbers at times
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return str(value)
    return value


class Customer(ValueObject):
    """Buyer contact details as submitted on the storefront."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    full_name: RequiredText
    phone: RequiredText
    telegram: str | None = None
    comment: str | None = None

    @field_validator("full_name", "phone", "telegram", "comment", mode="before")
    @classmethod
    def _coerce_numbers(cls, value: object) -> object:
        return _number_as_text(value)


class PurchaseInquiry(ValueObject):
    """A customer's request to buy a work, addressed to one artist."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    artist_username: RequiredText
    customer: Customer
    work_title: str | None = None
    price: Decimal | None = None

    @field_validator("work_title", mode="before")
    @classmethod
    def _coerce_title(cls, value: object) -> object:
        return _number_as_text(value)

    @field_validator("price", mode="before")
    @classmethod
    def _blank_price_is_none(cls, value: object) -> object:
        # An empty price field means "on request"
        if isinstance(value, str) and not value.strip():
            return None
        return value
