"""Health Check Routes"""
from typing import Annotated

from fastapi import APIRouter, Depends

from src.infrastructure.config import Settings, get_settings

router = APIRouter()


@router.get("/health")
async def health_check(settings: Annotated[Settings, Depends(get_settings)]) -> dict:
    """ヘルスチェック"""
    return {
        "status": "healthy",
        "service": settings.service_name,
        "environment": settings.environment,
    }


@router.get("/ready")
async def readiness_check(settings: Annotated[Settings, Depends(get_settings)]) -> dict:
    """レディネスチェック（必須設定の有無）"""
    missing = settings.missing_settings()
    return {
        "status": "ready" if not missing else "not_ready",
        "checks": {
            "configuration": "ok" if not missing else f"missing: {', '.join(missing)}",
        },
    }
