"""Health check endpoints."""
from fastapi import APIRouter, Depends
from typing import Dict, Any

from contribase.pages.assets import LandingAssets
from contribase.server.deps import get_landing_assets
from contribase.server.settings import settings

router = APIRouter()


@router.get("/healthz")
async def health_check() -> Dict[str, str]:
    """Basic health check endpoint.

    Returns:
        Simple status response
    """
    return {"status": "ok"}


@router.get("/readyz")
async def readiness_check(assets: LandingAssets = Depends(get_landing_assets)) -> Dict[str, Any]:
    """Readiness check endpoint.

    GitHub OAuth 설정, 세션 서명 키, 랜딩 페이지 자산 준비 여부를 확인합니다.

    Returns:
        Status response with readiness info
    """
    checks = {
        "github_oauth": bool(settings.GITHUB_CLIENT_ID and settings.GITHUB_CLIENT_SECRET),
        "session_secret": bool(settings.SESSION_SECRET),
        "landing_assets": assets.ready_state == "complete",
    }

    ready = all(checks.values())

    return {
        "status": "ok" if ready else "not_ready",
        "checks": checks
    }
