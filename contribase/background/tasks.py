"""Background tasks.

백그라운드 작업:
1. landing_asset_warmup_task: 랜딩 페이지 정적 자산을 다시 읽어 캐시 갱신
"""
import logging

from contribase.pages.assets import landing_assets

logger = logging.getLogger(__name__)


async def landing_asset_warmup_task():
    """랜딩 페이지 자산 캐시 갱신.

    처음 실행될 때 LandingPage의 load 이벤트가 발생합니다.
    """
    logger.info("=== Starting landing asset warmup ===")

    try:
        count = await landing_assets.warm()
        logger.info(f"Landing asset warmup done ({count} files)")
    except Exception as e:
        logger.error(f"Landing asset warmup failed: {e}")
