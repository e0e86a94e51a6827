import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])

@router.get("/health")
async def health(request: Request):
    settings = request.app.state.settings
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
        "environment": settings.ENVIRONMENT,
        "port": settings.PORT,
    }
