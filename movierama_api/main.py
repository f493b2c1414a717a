import logging

from fastapi import FastAPI
from pymongo.errors import PyMongoError

from contextlib import asynccontextmanager
from movierama_api.db.mongo import get_client, close_client

from movierama_api.core.logger import setup_json_logging, shutdown_logging
from movierama_api.core.sentry import init_sentry
from movierama_api.core.config import settings
from movierama_api.core.middleware import RequestContextMiddleware
from movierama_api.services.repositories.movies_repo import MoviesRepo

from movierama_api.api.v1.movies import router as movies_router
from movierama_api.api.v1.reactions import router as reactions_router
from movierama_api.api.v1.debug import include_debug_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # logging first, so startup problems are visible
    setup_json_logging(service=settings.app_name)
    init_sentry(settings.sentry_dsn, environment=settings.env)

    client = await get_client()
    try:
        await MoviesRepo(client[settings.mongo_db]).ensure_indexes()
    except PyMongoError as e:
        logger.warning("mongo_indexes_failed", extra={"err": str(e)})

    try:
        yield
    finally:
        await close_client()
        shutdown_logging()


app = FastAPI(title="Movierama Service", lifespan=lifespan)

app.add_middleware(RequestContextMiddleware)

# uvicorn access lines would duplicate ours
logging.getLogger("uvicorn.access").setLevel("WARNING")

include_debug_routes(app)


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(movies_router)
app.include_router(reactions_router)
