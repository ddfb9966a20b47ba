"""Background task scheduler using APScheduler.

스케줄러 관리:
- landing_asset_warmup: 시작 즉시 1회, 이후 ASSET_WARMUP_INTERVAL_MINUTES 마다 실행
"""
import logging
from datetime import datetime
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from contribase.background.tasks import landing_asset_warmup_task
from contribase.server.settings import settings

logger = logging.getLogger(__name__)

# 전역 스케줄러 인스턴스
scheduler: Optional[AsyncIOScheduler] = None


def init_scheduler():
    """스케줄러 초기화 및 작업 등록"""
    global scheduler

    if scheduler is not None:
        logger.warning("Scheduler already initialized")
        return

    scheduler = AsyncIOScheduler()

    scheduler.add_job(
        landing_asset_warmup_task,
        trigger=IntervalTrigger(minutes=settings.ASSET_WARMUP_INTERVAL_MINUTES),
        id="landing_asset_warmup",
        name="Landing Asset Warmup",
        replace_existing=True,
        max_instances=1,  # 동시 실행 방지
        coalesce=True,    # 누락된 실행 병합
        next_run_time=datetime.now(),  # 시작 즉시 1회 실행
    )

    logger.info("Scheduler initialized with 1 background task")


def start_scheduler():
    """스케줄러 시작"""
    global scheduler

    if scheduler is None:
        init_scheduler()

    if not scheduler.running:
        scheduler.start()
        logger.info("Scheduler started")

        for job in scheduler.get_jobs():
            logger.info(f"Job '{job.name}' next run: {job.next_run_time}")


def shutdown_scheduler():
    """스케줄러 종료"""
    global scheduler

    if scheduler and scheduler.running:
        scheduler.shutdown()
        logger.info("Scheduler shut down")
    scheduler = None
