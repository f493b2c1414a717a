from http import HTTPStatus
from typing import Optional
from fastapi import APIRouter, Depends, Query

from movierama_api.api.http_utils import ERRMAP, handle_runtime_errors
from movierama_api.dependencies import get_movies_service, user_id_header
from movierama_api.models.movies import (
    MovieCreateRequest, MovieCreateResponse,
    MovieItem, MovieListResponse, MovieSort,
)
from movierama_api.services.movies_service import MoviesService

router = APIRouter(prefix="/api/v1/movies", tags=["movies"])


@router.post("", response_model=MovieCreateResponse,
             status_code=HTTPStatus.CREATED)
@handle_runtime_errors(ERRMAP)
async def create_movie(
    body: MovieCreateRequest,
    user_id: str = Depends(user_id_header),
    svc: MoviesService = Depends(get_movies_service),
):
    return await svc.create_movie(user_id=user_id, data=body)


@router.get("", response_model=MovieListResponse,
            status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def list_movies(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    sort: MovieSort = Query(MovieSort.new),
    published_by: Optional[str] = Query(None, min_length=1),
    svc: MoviesService = Depends(get_movies_service),
):
    return await svc.list_movies(limit=limit,
                                 offset=offset,
                                 sort=sort,
                                 published_by=published_by)


@router.get("/{movie_id}", response_model=MovieItem,
            status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def get_movie(
    movie_id: str,
    svc: MoviesService = Depends(get_movies_service),
):
    return await svc.get_movie(movie_id)
