"""
[ATT-00] FastAPI 애플리케이션 진입점.
uvicorn checkin_rewards.main:app
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from checkin_rewards.core.database import init_db
from checkin_rewards.infrastructure.attendance.reward_catalog import get_reward_catalog
from checkin_rewards.infrastructure.attendance.router import router as attendance_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    # 잘못된 티어 설정은 기동 시점에 실패
    catalog = get_reward_catalog()
    logger.info("[ATT-00] attendance service started tiers=%s", [t.threshold_days for t in catalog.tiers_ascending()])
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="Check-in Rewards", lifespan=lifespan)
    app.include_router(attendance_router, prefix="/attendance", tags=["attendance"])
    return app


app = create_app()
