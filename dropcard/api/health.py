"""
Service status endpoints.

/health answers as long as the process is up. /ready also checks the
database and reports which optional features this deployment has on.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dropcard.config import settings
from dropcard.db.database import get_session

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    app: str


class FeatureFlags(BaseModel):
    """Optional features the clients should offer."""

    camera_ocr: bool
    save_qr: bool


class ReadyResponse(BaseModel):
    status: str
    database: str
    features: FeatureFlags
    qr_max_payload_bytes: int


def _features() -> FeatureFlags:
    return FeatureFlags(
        camera_ocr=settings.enable_camera_ocr,
        save_qr=settings.enable_save_qr,
    )


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness check; does not touch the database."""
    return HealthResponse(status="healthy", app=settings.app_name)


@router.get(
    "/ready",
    response_model=ReadyResponse,
    responses={503: {"model": ReadyResponse}},
)
async def ready(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ReadyResponse:
    """
    Readiness check.

    Returns 503 if the database is unavailable. Feature flags and the QR
    payload limit are reported either way so clients can configure themselves.
    """
    try:
        await session.execute(text("SELECT 1"))
        database = "connected"
    except (SQLAlchemyError, OSError):
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        database = "disconnected"

    return ReadyResponse(
        status="ready" if database == "connected" else "not ready",
        database=database,
        features=_features(),
        qr_max_payload_bytes=settings.qr_max_payload_bytes,
    )
