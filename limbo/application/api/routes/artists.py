"""Artist status REST routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from limbo.domain.notification.query.get_artist_status import (
    ArtistStatus,
    GetArtistStatus,
    GetArtistStatusHandler,
)

router = APIRouter(prefix="/artist", tags=["Artists"], route_class=DishkaRoute)


@router.get(
    "/{username}/status",
    response_model=ArtistStatus,
    response_model_exclude_none=True,
)
async def get_artist_status(
    username: str,
    handler: FromDishka[GetArtistStatusHandler],
) -> ArtistStatus:
    return await handler.run(GetArtistStatus(username=username))
