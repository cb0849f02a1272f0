from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dropcard.api import (
    cards_router,
    contacts_router,
    follow_ups_router,
    health_router,
    profiles_router,
    scan_router,
    validate_router,
)
from dropcard.config import settings
from dropcard.db.database import init_db


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    await init_db()
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("dropcard"),
    lifespan=lifespan,
)

app.include_router(cards_router)
app.include_router(contacts_router)
app.include_router(follow_ups_router)
app.include_router(health_router)
app.include_router(profiles_router)
app.include_router(scan_router)
app.include_router(validate_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
