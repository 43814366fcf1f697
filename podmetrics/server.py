from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from podmetrics.api.router import api_router
from podmetrics.db.pool import close_pool, get_pool
from podmetrics.utils.logger import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    setup_logging()
    await get_pool()
    yield
    await close_pool()


app = FastAPI(
    title="podmetrics",
    version="0.1.0",
    description="Budget-constrained social metrics refresh for tracked podcasts",
    lifespan=lifespan,
)

app.include_router(api_router)
