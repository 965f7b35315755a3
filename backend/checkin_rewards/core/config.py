"""
[ATT-00] 환경 변수 기반 애플리케이션 설정.
DB 접속 정보, 보상 티어 설정 파일 경로, 관리자 계정을 한 곳에서 읽는다.
"""
import os
from dataclasses import dataclass
from pathlib import Path

# 패키지 내 기본 보상 티어 설정 파일
DEFAULT_REWARD_TIERS_PATH = (
    Path(__file__).resolve().parent.parent / "infrastructure" / "attendance" / "config" / "reward_tiers.json"
)


@dataclass(frozen=True)
class Settings:
    database_url: str
    reward_tiers_config_path: Path
    admin_account: str
    sql_echo: bool = False


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


def _load_settings() -> Settings:
    tiers_path = os.getenv("REWARD_TIERS_CONFIG_PATH", "")
    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite:///./attendance.db"),
        reward_tiers_config_path=Path(tiers_path) if tiers_path else DEFAULT_REWARD_TIERS_PATH,
        admin_account=os.getenv("ATTENDANCE_ADMIN_ACCOUNT", "").strip(),
        sql_echo=_env_flag("SQL_ECHO"),
    )


_settings: Settings | None = None


def get_settings() -> Settings:
    """프로세스당 1회 로드(캐시). 테스트에서는 reset_settings()로 초기화."""
    global _settings
    if _settings is None:
        _settings = _load_settings()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
