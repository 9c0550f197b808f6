"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from config.settings import settings
from src.pb_cache.api.router import router as cache_router
from src.pb_cache.infrastructure.memory_cache import ResponseCache
from src.pb_common.database import engine
from src.pb_common.errors import AppError, DataAccessError
from src.pb_common.response import error_response
from src.pb_food.api.router import router as food_router
from src.pb_gateway.middleware.request_log import RequestLogMiddleware
from src.pb_message.api.router import router as message_router
from src.pb_profile.api.router import router as profile_router
from src.pb_restaurant.api.router import legacy_review_router
from src.pb_restaurant.api.router import router as restaurant_router
from src.pb_review.api.food_review_router import router as food_review_router
from src.pb_review.api.general_review_router import router as general_review_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
error_logger = logging.getLogger("pb.errors")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify the DB connection. Shutdown: dispose the pool."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)

# One cache per process; routes reach it through get_response_cache
app.state.response_cache = ResponseCache()

app.add_middleware(RequestLogMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_json(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(status_code=exc.http_status, content=resp.model_dump())


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error_json(request, exc)


@app.exception_handler(SQLAlchemyError)
async def data_access_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    error_logger.exception("Database error on %s %s", request.method, request.url.path)
    return _error_json(request, DataAccessError())


app.include_router(restaurant_router, prefix="/api")
app.include_router(legacy_review_router, prefix="/api")
app.include_router(food_router, prefix="/api")
app.include_router(food_review_router, prefix="/api")
app.include_router(general_review_router, prefix="/api")
app.include_router(profile_router, prefix="/api")
app.include_router(message_router, prefix="/api")
app.include_router(cache_router, prefix="/api")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
