from fastapi import Depends, Header, HTTPException, status
from motor.motor_asyncio import AsyncIOMotorDatabase
from movierama_api.core.config import settings
from movierama_api.db.mongo import get_mongo_db
from movierama_api.services.movies_service import MoviesService
from movierama_api.services.reactions_service import ReactionsService
from movierama_api.services.repositories.movies_repo import MoviesRepo

USER_ID_MAX_LENGTH = 128


def user_id_header(x_user_id: str = Header(..., alias="X-User-Id")) -> str:
    # identity is authenticated upstream; only normalise it here
    user_id = x_user_id.strip()
    if not user_id or len(user_id) > USER_ID_MAX_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Invalid X-User-Id")
    return user_id


async def get_db() -> AsyncIOMotorDatabase:
    return await get_mongo_db()


async def get_movies_repo(db=Depends(get_db)) -> MoviesRepo:
    return MoviesRepo(db)


async def get_movies_service(
        repo: MoviesRepo = Depends(get_movies_repo),
) -> MoviesService:
    return MoviesService(repo)


async def get_reactions_service(
        repo: MoviesRepo = Depends(get_movies_repo),
) -> ReactionsService:
    return ReactionsService(
        repo, use_transactions=settings.mongo_use_transactions)
