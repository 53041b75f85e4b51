"""Artist domain models."""

from .artist import USERNAME_MARKER, Artist, normalize_username
from .value import Invalidation, Registration, RegistrationOutcome

__all__ = [
    "USERNAME_MARKER",
    "Artist",
    "Invalidation",
    "Registration",
    "RegistrationOutcome",
    "normalize_username",
]
