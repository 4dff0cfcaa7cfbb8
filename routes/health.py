from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from models import HealthResponse
from settings import Settings, get_settings

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def health(settings: Settings = Depends(get_settings)):
    now = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return HealthResponse(status="ok", service=settings.service_name, time=now)
