import time
from datetime import datetime, timezone

from fastapi import APIRouter

from journal_coach.system.schemas import HealthResponse
import journal_coach.core.config as config

router = APIRouter(tags=["System"])

STARTED_AT = time.monotonic()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service status",
    description="Uptime in seconds, environment name and whether a database URL is configured.",
    responses={
        200: {"description": "Service is up."},
    },
)
def health_route() -> HealthResponse:
    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc),
        uptime=round(time.monotonic() - STARTED_AT, 3),
        environment=config.ENVIRONMENT,
        database_url="Set" if config.DATABASE_URL else "Not Set",
    )
