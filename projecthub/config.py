# projecthub/config.py
import os
from dataclasses import dataclass

from dotenv import load_dotenv

# .env 파일이 있으면 환경 변수로 먼저 적재합니다. (이미 설정된 값은 덮어쓰지 않음)
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """프로세스 전역 설정. 환경 변수에서 한 번 읽어 불변 객체로 보관합니다."""
    database_url: str = "sqlite:///projecthub.db"
    log_level: str = "INFO"
    session_ttl_hours: int = 24
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    session_cookie_secure: bool = True
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.getenv("DATABASE_URL", cls.database_url),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
            session_ttl_hours=int(os.getenv("SESSION_TTL_HOURS", cls.session_ttl_hours)),
            db_pool_size=int(os.getenv("DB_POOL_SIZE", cls.db_pool_size)),
            db_max_overflow=int(os.getenv("DB_MAX_OVERFLOW", cls.db_max_overflow)),
            db_pool_timeout=int(os.getenv("DB_POOL_TIMEOUT", cls.db_pool_timeout)),
            session_cookie_secure=_env_bool("SESSION_COOKIE_SECURE", cls.session_cookie_secure),
            port=int(os.getenv("PORT", cls.port)),
        )


settings = Settings.from_env()
