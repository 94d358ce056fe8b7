from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
def health(request: Request):
    return {
        "status": "ok",
        "service": request.app.state.settings.service_name,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
