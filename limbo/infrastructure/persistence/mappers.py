"""Artist mapper - converts between domain and the snapshot file format."""

from datetime import datetime
from typing import Any

from limbo.domain.artist.model import Artist

MODELLED_KEYS = frozenset({"name", "username", "slug", "telegramId", "registeredAt"})


def row_to_artist(row: dict[str, Any]) -> Artist:
    """Convert one ``artists[]`` entry to an Artist.

    Older writers cleared ``telegramId`` but left ``registeredAt`` behind;
    such entries load as unregistered. Keys outside the snapshot layout are
    kept on the artist so a later save writes them back.
    """
    recipient_id = row.get("telegramId")
    registered_at = row.get("registeredAt") if recipient_id is not None else None
    if isinstance(registered_at, str):
        registered_at = datetime.fromisoformat(registered_at)

    return Artist(
        name=row["name"],
        username=row["username"],
        slug=row["slug"],
        recipient_id=recipient_id,
        registered_at=registered_at,
        roster_fields={k: v for k, v in row.items() if k not in MODELLED_KEYS},
    )


def artist_to_row(artist: Artist) -> dict[str, Any]:
    """Convert an Artist to its snapshot entry. Absent fields are omitted."""
    row: dict[str, Any] = {
        "name": artist.name,
        "username": artist.username,
        "slug": artist.slug,
        **artist.roster_fields,
    }
    if artist.recipient_id is not None and artist.registered_at is not None:
        row["telegramId"] = artist.recipient_id
        row["registeredAt"] = artist.registered_at.isoformat()
    return row
