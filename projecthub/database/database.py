from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, declarative_base

from projecthub.config import settings


def build_engine(database_url: str, **overrides):
    """
    연결 문자열에 맞는 SQLAlchemy 엔진을 생성합니다.

    SQLite는 스레드 간 연결 공유를 허용하도록 check_same_thread=False를 지정하고,
    그 외 드라이버(PostgreSQL 등)는 설정값으로 커넥션 풀 크기와 대기 시간을 제한합니다.
    풀이 고갈되면 pool_timeout 초 후 예외가 발생하므로 요청이 무한정 대기하지 않습니다.
    """
    if make_url(database_url).get_backend_name() == "sqlite":
        options = {"connect_args": {"check_same_thread": False}}
    else:
        options = {
            "pool_size": settings.db_pool_size,
            "max_overflow": settings.db_max_overflow,
            "pool_timeout": settings.db_pool_timeout,
            "pool_pre_ping": True,
        }
    options.update(overrides)
    return create_engine(database_url, **options)


# SQLAlchemy 엔진 생성 (프로세스당 하나, 모든 요청이 풀을 공유)
engine = build_engine(settings.database_url)

# 데이터베이스 세션 생성을 위한 SessionLocal 클래스
# autocommit=False, autoflush=False로 설정하여, 명시적으로 commit을 호출해야 DB에 반영됩니다.
# expire_on_commit=False: commit 이후에도 응답 직렬화를 위해 속성을 그대로 읽을 수 있어야 합니다.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)

# 모든 모델 클래스가 상속받을 Base 클래스
Base = declarative_base()
