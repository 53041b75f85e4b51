from enum import StrEnum

from limbo.domain.artist.model.artist import Artist
from limbo.domain.shared.model.value import ValueObject


class RegistrationOutcome(StrEnum):
    """What a ``register`` call did to the artist's recipient binding."""

    REGISTERED = "registered"  # absent -> present
    REFRESHED = "refreshed"  # overwritten with a different recipient
    UNCHANGED = "unchanged"  # same recipient, idempotent no-op


class Registration(ValueObject):
    artist: Artist
    outcome: RegistrationOutcome
    persisted: bool


class Invalidation(ValueObject):
    artist: Artist
    changed: bool
    persisted: bool
