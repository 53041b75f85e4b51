import asyncio
import json
import logging
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from limbo.domain.artist.model import Artist
from limbo.domain.artist.port.store import RegistryStore
from limbo.domain.shared.error import StoreCorruptError, StoreWriteError
from limbo.infrastructure.persistence.mappers import artist_to_row, row_to_artist

logger = logging.getLogger(__name__)


class JsonRegistryStore(RegistryStore):
    """Keeps the artist roster in a single JSON document.

    Layout: ``{"artists": [{name, username, slug, telegramId?, registeredAt?}]}``.
    Writes go to a temp file in the same directory and are renamed over the
    target, so readers see either the old or the new document.
    Top-level keys other than ``artists`` are remembered on load and written
    back on every save.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._document_fields: dict[str, Any] = {}

    async def exists(self) -> bool:
        return self.path.exists()

    async def load(self) -> list[Artist]:
        return await asyncio.to_thread(self._read)

    async def save(self, artists: Sequence[Artist]) -> None:
        document = {
            **self._document_fields,
            "artists": [artist_to_row(artist) for artist in artists],
        }
        await asyncio.to_thread(self._write, document)

    def _read(self) -> list[Artist]:
        if not self.path.exists():
            return []

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StoreCorruptError(f"Cannot read artist snapshot {self.path}: {e}") from e

        rows = data.get("artists") if isinstance(data, dict) else None
        if not isinstance(rows, list):
            raise StoreCorruptError(f"Artist snapshot {self.path} has no 'artists' list")
        self._document_fields = {k: v for k, v in data.items() if k != "artists"}

        artists: list[Artist] = []
        seen: set[str] = set()
        for index, row in enumerate(rows):
            try:
                artist = row_to_artist(row)
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                raise StoreCorruptError(
                    f"Invalid artist entry #{index} in {self.path}: {e}"
                ) from e
            if artist.username in seen:
                raise StoreCorruptError(
                    f"Duplicate username {artist.username} in {self.path}"
                )
            seen.add(artist.username)
            artists.append(artist)

        return artists

    def _write(self, document: dict[str, Any]) -> None:
        content = json.dumps(document, ensure_ascii=False, indent=2)
        tmp_path: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with open(fd, "w", encoding="utf-8") as f:
                f.write(content)
            Path(tmp_path).replace(self.path)
        except OSError as e:
            if tmp_path is not None:
                Path(tmp_path).unlink(missing_ok=True)
            raise StoreWriteError(f"Cannot write artist snapshot {self.path}: {e}") from e
