from datetime import datetime, timezone

from fastapi import APIRouter

from securequote.models import HealthCheckResponse

router = APIRouter(tags=["system"])


@router.get("/healthcheck", response_model=HealthCheckResponse)
def healthcheck():
    return HealthCheckResponse(status="ok", timestamp=datetime.now(timezone.utc))
