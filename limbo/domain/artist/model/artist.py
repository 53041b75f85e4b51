from datetime import UTC, datetime
from typing import Any

from pydantic import Field, field_validator, model_validator
from typing_extensions import Self

from limbo.domain.shared.model.value import ValueObject

USERNAME_MARKER = "@"


def normalize_username(raw: str) -> str:
    """Return the canonical ``@handle`` form of a raw username.

    Lookup is case- and marker-insensitive, so ``Anna``, ``@anna`` and
    ``@@ANNA`` all map to ``@anna``.
    """
    handle = raw.strip().lstrip(USERNAME_MARKER).strip().lower()
    if not handle:
        raise ValueError(f"Invalid username: {raw!r}")
    return f"{USERNAME_MARKER}{handle}"


class Artist(ValueObject):
    """One enrolled artist.

    Identity fields (name, username, slug) come from the roster and never change.
    ``recipient_id`` and ``registered_at`` are always set and cleared together.
    ``roster_fields`` holds roster keys this service does not model; they are
    written back unchanged.
    """

    name: str
    username: str
    slug: str
    recipient_id: str | None = None
    registered_at: datetime | None = None
    roster_fields: dict[str, Any] = Field(default_factory=dict)

    @field_validator("username")
    @classmethod
    def _canonical_username(cls, value: str) -> str:
        return normalize_username(value)

    @field_validator("recipient_id", mode="before")
    @classmethod
    def _recipient_as_string(cls, value: object) -> object:
        # Chat ids arrive as integers from the transport
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @model_validator(mode="after")
    def _registration_fields_paired(self) -> Self:
        if (self.recipient_id is None) != (self.registered_at is None):
            raise ValueError("recipient_id and registered_at must be set together")
        return self

    @property
    def is_registered(self) -> bool:
        return self.recipient_id is not None

    def register(self, recipient_id: str, *, at: datetime | None = None) -> "Artist":
        """Return a copy bound to ``recipient_id`` with a fresh registration time."""
        return self.model_validate(
            {
                **self.model_dump(),
                "recipient_id": recipient_id,
                "registered_at": at or datetime.now(UTC),
            }
        )

    def unregister(self) -> "Artist":
        """Return a copy with the recipient binding cleared."""
        return self.model_validate(
            {**self.model_dump(), "recipient_id": None, "registered_at": None}
        )
