"""
Movie endpoints for API v1.

Listing, creating, showing and re-stocking movies.  ``GET /movies``
with a ``query`` parameter searches the external catalog instead of
the store's own records.
"""

from typing import List, Optional, Union

from fastapi import APIRouter, Path, Query, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from video_store_api.app.core.errors import ValidationError
from video_store_api.app.schemas.movie import (
    Movie,
    MovieBase,
    MovieCreate,
    MovieCreated,
    MovieDetail,
    MovieInventoryUpdate,
)
from video_store_api.app.services.movie_service import MovieService
from video_store_api.app.services.movie_wrapper import MovieWrapper


router = APIRouter()


@router.get("/", response_model=Union[List[Movie], List[MovieBase]])
async def list_movies(
    query: Optional[str] = Query(None, description="Search the external movie catalog"),
):
    """List the store's movies, or search the catalog when ``query`` is given."""
    if query:
        return await run_in_threadpool(MovieWrapper.search, query)
    return await MovieService.list_movies()


@router.post("/", response_model=MovieCreated)
async def create_movie(movie: MovieCreate):
    """Add a movie to the store.

    Responds with HTTP 400 and ``{"message": {field: [...]}}`` when the
    title is missing or already taken.
    """
    try:
        return await MovieService.create_movie(movie)
    except ValidationError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": e.as_errors()},
        )


@router.get("/{title}", response_model=MovieDetail)
async def get_movie(title: str = Path(..., description="Exact movie title")) -> MovieDetail:
    return await MovieService.get_movie_detail(title)


@router.patch("/{title}", response_model=MovieDetail)
async def update_movie_inventory(
    update: MovieInventoryUpdate,
    title: str = Path(..., description="Exact movie title"),
) -> MovieDetail:
    """Change how many copies of a movie the store owns."""
    return await MovieService.update_inventory(title, update.inventory)
