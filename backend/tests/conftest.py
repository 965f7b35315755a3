import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from checkin_rewards.core.database import Base
from checkin_rewards.infrastructure.attendance import models  # noqa: F401
from checkin_rewards.infrastructure.attendance.attendance_manager import AttendanceManager
from checkin_rewards.infrastructure.attendance.constants import ONE_DAY_SECONDS
from checkin_rewards.infrastructure.attendance.reward_catalog import RewardCatalog
from checkin_rewards.infrastructure.attendance.router import get_attendance_manager, get_attendance_service
from checkin_rewards.infrastructure.attendance.service import AttendanceServiceImpl
from checkin_rewards.main import create_app

ADMIN = "0xadmin"
URIS = [f"ipfs://tier-{days}/metadata.json" for days in (30, 90, 180, 365, 730)]

# 2023-11-14 01:00:00 UTC (자정 직후라 하루+1초씩 진행해도 날짜를 건너뛰지 않음)
START_TS = 1_699_923_600


class FakeClock:
    """테스트용 시계. advance()로 시간을 앞으로 돌린다."""

    def __init__(self, now: int = START_TS):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, days: int = 0, seconds: int = 0) -> None:
        self.now += days * ONE_DAY_SECONDS + seconds


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, expire_on_commit=False)
    engine.dispose()


@pytest.fixture
def catalog() -> RewardCatalog:
    return RewardCatalog(admin=ADMIN, metadata_uris=URIS)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def manager(session_factory, catalog, clock) -> AttendanceManager:
    return AttendanceManager(session_factory=session_factory, catalog=catalog, clock=clock)


@pytest.fixture
def service(session_factory, catalog) -> AttendanceServiceImpl:
    return AttendanceServiceImpl(session_factory=session_factory, catalog=catalog)


@pytest.fixture
def check_in_days(manager, clock):
    """days일 연속 출석(매 출석 후 하루+1초 경과)."""

    def _run(account: str, days: int) -> None:
        for _ in range(days):
            manager.check_in(account)
            clock.advance(days=1, seconds=1)

    return _run


@pytest.fixture
def client(manager, service):
    app = create_app()
    app.dependency_overrides[get_attendance_manager] = lambda: manager
    app.dependency_overrides[get_attendance_service] = lambda: service
    return TestClient(app)
