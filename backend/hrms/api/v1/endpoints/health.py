from __future__ import annotations

import logging

from fastapi import APIRouter

from hrms.core.config import settings
from hrms.services.employee_store import employee_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


def _storage_status() -> str:
    if not employee_store.initialized:
        return "not_configured"
    try:
        return "ok" if employee_store.check_storage() else "error"
    except Exception:
        logger.exception("Storage health check failed")
        return "error"


@router.get("")
def health_check():
    storage = _storage_status()
    return {
        "status": "degraded" if storage == "error" else "healthy",
        "version": settings.APP_VERSION,
        "services": {"storage": storage},
    }


@router.get("/ready")
def readiness_probe():
    return {"ready": True}
