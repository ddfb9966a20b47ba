"""Landing page endpoints.

- GET /: 랜딩 페이지. 자산이 아직 준비되지 않았으면 스켈레톤 UI를 먼저 보내고,
  LandingPage가 준비되면(load 또는 최대 대기 시간) 실제 콘텐츠를 이어서 보냅니다.
- GET /api/v1/landing: 랜딩 페이지 콘텐츠 (JSON)
- GET /assets/{path}: 미리 읽어 둔 랜딩 페이지 자산
"""
import logging
import mimetypes
from typing import AsyncIterator

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import StreamingResponse

from contribase.pages.assets import LandingAssets
from contribase.pages.content import LANDING_CONTENT, LandingContent
from contribase.pages.landing import LandingPage
from contribase.server.deps import get_landing_assets
from contribase.server.settings import settings
from contribase.server.templating import render

router = APIRouter(tags=["pages"])
logger = logging.getLogger(__name__)

PAGE_TITLE = "Contribase - GitHub 기여도 포트폴리오"
HIDE_SKELETON = "<style>#landing-skeleton{display:none}</style>\n"


async def _stream_landing(page: LandingPage) -> AsyncIterator[str]:
    page.mount()
    try:
        yield render("_layout_start.html", title=PAGE_TITLE)

        if page.is_loading:
            yield render("landing_skeleton.html", card_count=len(LANDING_CONTENT.features))
            source = await page.wait_ready()
            logger.debug(f"Landing skeleton replaced ({source})")
            yield HIDE_SKELETON

        yield render("landing_content.html", content=LANDING_CONTENT)
        yield render("_layout_end.html")
    finally:
        page.unmount()


@router.get("/", include_in_schema=False)
async def landing(assets: LandingAssets = Depends(get_landing_assets)):
    """랜딩 페이지 (스트리밍 HTML)."""
    page = LandingPage(assets, timeout=settings.LANDING_READY_TIMEOUT_SECONDS)
    return StreamingResponse(_stream_landing(page), media_type="text/html; charset=utf-8")


@router.get("/api/v1/landing", response_model=LandingContent)
async def landing_content() -> LandingContent:
    """랜딩 페이지 콘텐츠를 JSON으로 반환합니다."""
    return LANDING_CONTENT


@router.get("/assets/{path:path}", include_in_schema=False)
async def landing_asset(path: str, assets: LandingAssets = Depends(get_landing_assets)):
    """미리 읽어 둔 자산을 반환합니다. 캐시에 없으면 404."""
    data = assets.get(path)
    if data is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Asset not found")

    media_type = mimetypes.guess_type(path)[0] or "application/octet-stream"
    return Response(content=data, media_type=media_type, headers={"Cache-Control": "public, max-age=3600"})
