import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from projecthub.services.exceptions import DatabaseError

logger = logging.getLogger(__name__)


@contextmanager
def translate_db_errors(db: Session, action: str):
    """
    블록 안에서 발생한 SQLAlchemy 예외를 롤백 후 DatabaseError로 감쌉니다.
    드라이버 메시지는 로그에만 남기고 클라이언트에는 일반 메시지만 전달됩니다.
    """
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Database error while %s", action)
        raise DatabaseError("A database error occurred.") from e
