from http import HTTPStatus
from fastapi import APIRouter, Depends, Response

from movierama_api.api.http_utils import ERRMAP, handle_runtime_errors
from movierama_api.dependencies import get_reactions_service, user_id_header
from movierama_api.models.reactions import (
    ReactionRequest, ReactionStateResponse,
)
from movierama_api.services.reactions_service import ReactionsService

router = APIRouter(prefix="/api/v1/movies", tags=["reactions"])


@router.get(
    "/{movie_id}/reaction",
    response_model=ReactionStateResponse,
    status_code=HTTPStatus.OK)
@handle_runtime_errors(ERRMAP)
async def get_reaction(
    movie_id: str,
    user_id: str = Depends(user_id_header),
    svc: ReactionsService = Depends(get_reactions_service),
) -> ReactionStateResponse:
    reaction = await svc.get_reaction(movie_id, user_id)
    return ReactionStateResponse(
        movie_id=movie_id, user_id=user_id, reaction=reaction)


@router.put("/{movie_id}/reaction", status_code=HTTPStatus.NO_CONTENT)
@handle_runtime_errors(ERRMAP)
async def add_reaction(
    movie_id: str,
    body: ReactionRequest,
    user_id: str = Depends(user_id_header),
    svc: ReactionsService = Depends(get_reactions_service),
) -> Response:
    await svc.add_reaction(movie_id, user_id, body.reaction)
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.patch("/{movie_id}/reaction", status_code=HTTPStatus.NO_CONTENT)
@handle_runtime_errors(ERRMAP)
async def switch_reaction(
    movie_id: str,
    user_id: str = Depends(user_id_header),
    svc: ReactionsService = Depends(get_reactions_service),
) -> Response:
    await svc.switch_reaction(movie_id, user_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.delete("/{movie_id}/reaction", status_code=HTTPStatus.NO_CONTENT)
@handle_runtime_errors(ERRMAP)
async def remove_reaction(
    movie_id: str,
    user_id: str = Depends(user_id_header),
    svc: ReactionsService = Depends(get_reactions_service),
) -> Response:
    await svc.remove_reaction(movie_id, user_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)
