from datetime import datetime

from limbo.domain.artist.service.registry import ArtistRegistry
from limbo.domain.shared.query import Query, QueryHandler, Result


class GetArtistStatus(Query):
    username: str


class ArtistStatus(Result):
    found: bool
    name: str | None = None
    registered: bool | None = None
    recipient_id: str | None = None
    registered_at: datetime | None = None
    message: str | None = None


class GetArtistStatusHandler(QueryHandler[GetArtistStatus, ArtistStatus]):
    registry: ArtistRegistry

    async def run(self, query: GetArtistStatus) -> ArtistStatus:
        artist = self.registry.find_by_username(query.username)
        if artist is None:
            return ArtistStatus(found=False, message="Artist not found")
        return ArtistStatus(
            found=True,
            name=artist.name,
            registered=artist.is_registered,
            recipient_id=artist.recipient_id,
            registered_at=artist.registered_at,
        )
