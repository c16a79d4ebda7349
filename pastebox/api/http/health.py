from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from pastebox.core.db import check_database

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check():
    """Процесс жив"""
    return {"status": "healthy", "service": "pastebox"}


@router.get("/ready")
async def readiness_check():
    """Готовность: доступна ли БД"""
    if not await check_database():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
