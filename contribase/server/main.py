"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from contribase.server.routers import health, auth, pages
from contribase.server.settings import settings
from contribase.background.scheduler import start_scheduler, shutdown_scheduler
from contribase.pages.callback import CallbackBaseConfig

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


# FastAPI 생명주기 관리
@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 시작/종료 시 실행되는 코드"""
    logger.info("Starting application...")
    logger.info(f"Callback base URL: {app.state.callback_config.base_url}")

    # 백그라운드 스케줄러 시작 (랜딩 페이지 자산 warmup 포함)
    start_scheduler()
    logger.info("Background scheduler started")

    yield

    logger.info("Shutting down application...")
    shutdown_scheduler()
    logger.info("Background scheduler stopped")


# Create FastAPI app
app = FastAPI(
    title="Contribase Web",
    description="Contribase landing page and GitHub OAuth handoff",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# callback base URL 후보는 시작 시 한 번만 읽음
app.state.callback_config = CallbackBaseConfig.from_settings(settings)

# Include routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(pages.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "contribase.server.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=True
    )
