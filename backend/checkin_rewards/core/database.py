"""
[ATT-00] SQLAlchemy 엔진·세션 팩토리.
모든 도메인 모델은 Base를 상속하고, 서비스는 get_session_factory()로 세션을 연다.
"""
import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from checkin_rewards.core.config import get_settings

logger = logging.getLogger(__name__)

Base = declarative_base()

_engine: Engine | None = None
_session_factory: sessionmaker | None = None


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        settings = get_settings()
        connect_args = {}
        if settings.database_url.startswith("sqlite"):
            # FastAPI 스레드풀에서 동일 커넥션 사용 허용
            connect_args["check_same_thread"] = False
        _engine = create_engine(settings.database_url, echo=settings.sql_echo, connect_args=connect_args)
        logger.info("[ATT-00] database engine created url=%s", _engine.url.render_as_string(hide_password=True))
    return _engine


def get_session_factory() -> sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(bind=get_engine(), expire_on_commit=False)
    return _session_factory


def configure_engine(engine: Engine) -> sessionmaker:
    """외부에서 만든 엔진으로 교체(테스트·임베딩용). 새 세션 팩토리를 반환한다."""
    global _engine, _session_factory
    _engine = engine
    _session_factory = sessionmaker(bind=engine, expire_on_commit=False)
    return _session_factory


def init_db() -> None:
    """선언된 모든 테이블 생성(존재하면 건너뜀)."""
    # 모델 등록을 위해 import
    from checkin_rewards.infrastructure.attendance import models  # noqa: F401

    Base.metadata.create_all(bind=get_engine())
