"""
Health Check Endpoints

- /health/live  - Basic liveness (app is running)
- /health/ready - Readiness check (the configured store answers)
"""

from datetime import datetime
from typing import Any, Dict
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.core.config import Settings
from app.core.exceptions import CampusOpsError
from app.core.logging_config import logger
from app.modules.auth.dependencies import get_settings, get_storage
from app.storage import Storage


router = APIRouter(prefix="/health", tags=["Health Checks"])


async def check_storage(storage: Storage) -> Dict[str, Any]:
    """Run a trivial read against the store"""
    start = time.time()
    try:
        await storage.users.exists_by("username", "")
        return {
            "status": "healthy",
            "backend": storage.backend_name,
            "latency_ms": round((time.time() - start) * 1000, 2),
        }
    except CampusOpsError as e:
        return {
            "status": "unhealthy",
            "backend": storage.backend_name,
            "error": e.message,
        }


@router.get("/live")
async def liveness_check(config: Settings = Depends(get_settings)):
    """Liveness check - the process is up"""
    return {
        "status": "alive",
        "service": config.APP_NAME,
        "timestamp": datetime.utcnow().isoformat(),
    }


@router.get("/ready")
async def readiness_check(storage: Storage = Depends(get_storage)):
    """
    Readiness check - the application can serve requests.

    Returns 503 when the store does not answer.
    """
    storage_check = await check_storage(storage)
    is_ready = storage_check["status"] == "healthy"

    response = {
        "status": "ready" if is_ready else "not_ready",
        "timestamp": datetime.utcnow().isoformat(),
        "checks": {"storage": storage_check},
    }

    if not is_ready:
        logger.warning(f"[HealthCheck] Readiness check failed: {response}")
        return JSONResponse(status_code=503, content=response)

    return response
