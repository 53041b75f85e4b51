"""Health check route."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from limbo.domain.artist.service.registry import ArtistRegistry

router = APIRouter(tags=["Health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    status: str
    artists: int
    registered: int
    snapshot_saved: bool


@router.get("/health", response_model=HealthResponse)
async def health(registry: FromDishka[ArtistRegistry]) -> HealthResponse:
    return HealthResponse(
        status="ok",
        artists=len(registry.list()),
        registered=registry.registered_count(),
        snapshot_saved=not registry.dirty,
    )
