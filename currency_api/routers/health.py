from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from currency_api.core.config import Settings
from currency_api.core.dependencies import get_app_settings, get_started_at
from currency_api.models.conversion import GreetingOut, HealthOut
from currency_api.services.clock import format_uptime, iso_timestamp

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthOut, summary="Liveness check")
async def health(started_at: datetime = Depends(get_started_at)):
    return HealthOut(uptime=format_uptime(started_at))


@router.get("/", response_model=GreetingOut, summary="Service greeting")
@router.get("/hello", response_model=GreetingOut, summary="Service greeting")
async def hello(settings: Settings = Depends(get_app_settings)):
    body = GreetingOut(
        timestamp=iso_timestamp(), service=settings.app_name, version=settings.version
    )
    return JSONResponse(content=body.model_dump(), headers={"Cache-Control": "no-cache"})
