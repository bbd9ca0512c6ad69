from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from projecthub.database import models
from projecthub.database.models.account import EMAIL_UNIQUE_CONSTRAINT
from projecthub.repositories.interfaces import IAccountRepository
from projecthub.repositories.sqlalchemy.errors import translate_db_errors
from projecthub.services.exceptions import DuplicateEmailError


def is_email_conflict(error: IntegrityError) -> bool:
    """
    IntegrityError가 이메일 UNIQUE 제약 위반인지 판정합니다.
    PostgreSQL은 제약 조건 이름을, SQLite는 '테이블.컬럼'만 메시지에 포함합니다.
    """
    message = str(error.orig)
    return EMAIL_UNIQUE_CONSTRAINT in message or "UNIQUE constraint failed: accounts.email" in message


class SqlalchemyAccountRepository(IAccountRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, account_model: models.Account) -> models.Account:
        with translate_db_errors(self.db, "creating account"):
            self.db.add(account_model)
            try:
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                # 동시 가입 경쟁은 사전 조회가 아니라 UNIQUE 제약으로만 판정합니다.
                if is_email_conflict(e):
                    raise DuplicateEmailError("An account with this email already exists.") from e
                raise
        return account_model

    def find_by_email(self, email: str) -> Optional[models.Account]:
        with translate_db_errors(self.db, "loading account by email"):
            return self.db.query(models.Account).filter(models.Account.email == email).first()
