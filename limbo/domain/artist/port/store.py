"""Port for durable snapshots of the artist roster."""

from abc import abstractmethod
from collections.abc import Sequence
from typing import Protocol

from limbo.domain.artist.model import Artist
from limbo.domain.shared.port import Port


class RegistryStore(Port, Protocol):
    """Loads and saves the whole artist collection as one snapshot."""

    @abstractmethod
    async def exists(self) -> bool:
        """Whether a snapshot has ever been written."""
        ...

    @abstractmethod
    async def load(self) -> list[Artist]:
        """Read the snapshot.

        Returns an empty list when no snapshot exists.

        Raises:
            StoreCorruptError: Snapshot is present but not well-formed.
        """
        ...

    @abstractmethod
    async def save(self, artists: Sequence[Artist]) -> None:
        """Replace the snapshot atomically.

        Raises:
            StoreWriteError: The snapshot could not be written.
        """
        ...
