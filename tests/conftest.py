# tests/conftest.py
import pytest
from argon2 import PasswordHasher
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from projecthub.database.database import build_engine
from projecthub.database.db_init import initialize_db

# ===================================================================
#  공용 Fixture: 인메모리 SQLite + 저비용 해셔
# ===================================================================

@pytest.fixture
def fast_hasher() -> PasswordHasher:
    """테스트 속도를 위해 비용 파라미터를 최소로 낮춘 Argon2 해셔."""
    return PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)

@pytest.fixture
def engine():
    """
    StaticPool로 하나의 연결을 공유하는 인메모리 SQLite 엔진.
    일반 :memory: DB는 연결마다 별개이므로 풀 연결을 하나로 고정합니다.
    """
    engine = build_engine("sqlite://", poolclass=StaticPool)
    initialize_db(engine)
    yield engine
    engine.dispose()

@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)

@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    yield db
    db.close()

@pytest.fixture
def file_session_factory(tmp_path):
    """스레드별로 별도 연결이 필요한 동시성 테스트용 파일 기반 SQLite."""
    engine = build_engine(f"sqlite:///{tmp_path / 'concurrency.db'}")
    initialize_db(engine)
    yield sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
    engine.dispose()
