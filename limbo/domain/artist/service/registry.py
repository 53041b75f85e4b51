"""In-memory artist registry backed by a durable snapshot."""

import asyncio
import logging
from datetime import UTC, datetime

from limbo.domain.artist.model import (
    Artist,
    Invalidation,
    Registration,
    RegistrationOutcome,
    normalize_username,
)
from limbo.domain.artist.port.store import RegistryStore
from limbo.domain.shared.error import NotFoundError, StoreWriteError

logger = logging.getLogger(__name__)


class ArtistRegistry:
    """Authoritative artist state for the running process.

    The registry is the only owner of the artist collection and the only writer
    of its snapshot. Mutations (``register``, ``invalidate``, ``flush``) run
    under one lock; each swaps a whole immutable ``Artist`` record, takes a
    point-in-time copy of the collection and saves it before releasing the lock.
    Reads never lock.

    A failed save does not undo the in-memory change. It is logged, reported as
    ``persisted=False`` and the registry stays dirty so the next mutation writes
    the full current state again.
    """

    def __init__(self, store: RegistryStore) -> None:
        self._store = store
        self._artists: dict[str, Artist] = {}
        self._lock = asyncio.Lock()
        self._dirty = False

    @property
    def dirty(self) -> bool:
        """True while the last snapshot write failed."""
        return self._dirty

    async def load(self) -> None:
        """Populate the registry from the store.

        Raises:
            StoreCorruptError: Snapshot is unreadable; the process must not start.
        """
        async with self._lock:
            existed = await self._store.exists()
            artists = await self._store.load()
            self._artists = {artist.username: artist for artist in artists}

            if not existed:
                logger.warning("No artist snapshot found, creating an empty one")
                await self._persist()
                return

        logger.info("Loaded %d artists", len(self._artists))
        for artist in self._artists.values():
            logger.info(
                "  %s (%s) %s",
                artist.name,
                artist.username,
                "registered" if artist.is_registered else "not registered",
            )

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def find_by_username(self, raw: str) -> Artist | None:
        try:
            key = normalize_username(raw)
        except ValueError:
            return None
        return self._artists.get(key)

    def find_by_recipient_id(self, recipient_id: str) -> Artist | None:
        for artist in list(self._artists.values()):
            if artist.recipient_id == recipient_id:
                return artist
        return None

    def list(self) -> list[Artist]:
        """All artists in roster order."""
        return list(self._artists.values())

    def registered_count(self) -> int:
        return sum(1 for artist in list(self._artists.values()) if artist.is_registered)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def register(self, username: str, recipient_id: str) -> Registration:
        """Bind ``username`` to ``recipient_id``.

        Re-registering the same recipient is a no-op. A different recipient
        overwrites the old one and refreshes ``registered_at``.

        Raises:
            NotFoundError: No artist with this username.
        """
        async with self._lock:
            current = self._require(username)

            if current.recipient_id == recipient_id:
                persisted = await self._persist() if self._dirty else True
                return Registration(
                    artist=current,
                    outcome=RegistrationOutcome.UNCHANGED,
                    persisted=persisted,
                )

            outcome = (
                RegistrationOutcome.REFRESHED
                if current.is_registered
                else RegistrationOutcome.REGISTERED
            )
            updated = current.register(recipient_id, at=datetime.now(UTC))
            self._artists[updated.username] = updated
            persisted = await self._persist()

        logger.info(
            "Artist %s %s with recipient %s", updated.name, outcome.value, recipient_id
        )
        return Registration(artist=updated, outcome=outcome, persisted=persisted)

    async def invalidate(
        self, username: str, recipient_id: str | None = None
    ) -> Invalidation:
        """Clear the recipient binding of ``username``.

        With ``recipient_id`` the binding is cleared only while it still points
        at that recipient, so a stale delivery failure cannot undo a newer
        registration.

        Raises:
            NotFoundError: No artist with this username.
        """
        async with self._lock:
            current = self._require(username)

            if not current.is_registered or (
                recipient_id is not None and current.recipient_id != recipient_id
            ):
                persisted = await self._persist() if self._dirty else True
                return Invalidation(artist=current, changed=False, persisted=persisted)

            updated = current.unregister()
            self._artists[updated.username] = updated
            persisted = await self._persist()

        logger.warning("Recipient of %s (%s) invalidated", updated.name, updated.username)
        return Invalidation(artist=updated, changed=True, persisted=persisted)

    async def flush(self) -> bool:
        """Write the current state regardless of whether anything changed."""
        async with self._lock:
            return await self._persist()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _require(self, username: str) -> Artist:
        artist = self.find_by_username(username)
        if artist is None:
            raise NotFoundError(f"Artist not found: {username}")
        return artist

    async def _persist(self) -> bool:
        """Save a snapshot of the collection. Must be called with the lock held."""
        snapshot = list(self._artists.values())
        try:
            await self._store.save(snapshot)
        except StoreWriteError as e:
            self._dirty = True
            logger.warning("Artist snapshot not saved, will retry on next change: %s", e)
            return False

        self._dirty = False
        logger.debug("Artist snapshot saved (%d artists)", len(snapshot))
        return True
