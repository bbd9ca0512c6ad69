import logging

from .database import engine, SessionLocal, Base
from .models import *  # noqa: F401,F403  (테이블 등록을 위해 모든 모델을 임포트)

logger = logging.getLogger(__name__)


def initialize_db(bind=None):
    """
    모든 테이블을 생성합니다. (이미 존재하면 생성하지 않음)
    기본 데이터는 넣지 않습니다. 계정은 /signup으로만 생성됩니다.
    """
    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info("Database schema is ready (%s).", bind.url.render_as_string(hide_password=True))


def purge_expired_sessions() -> int:
    """만료된 세션 행을 일괄 삭제하는 유지보수 작업입니다."""
    from projecthub.repositories.sqlalchemy import SqlalchemySessionRepository
    from projecthub.services.session_service import SessionService

    db = SessionLocal()
    try:
        return SessionService(SqlalchemySessionRepository(db)).purge_expired()
    finally:
        db.close()


if __name__ == '__main__':
    from projecthub.config import settings
    from projecthub.logging_config import configure_logging

    configure_logging(settings.log_level)
    initialize_db()
    removed = purge_expired_sessions()
    logger.info("Purged %d expired session(s).", removed)
