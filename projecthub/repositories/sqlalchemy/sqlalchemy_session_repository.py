from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from projecthub.database import models
from projecthub.repositories.interfaces import IAuthSessionRepository
from projecthub.repositories.sqlalchemy.errors import translate_db_errors

class SqlalchemySessionRepository(IAuthSessionRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, session_model: models.AuthSession) -> models.AuthSession:
        with translate_db_errors(self.db, "creating session"):
            self.db.add(session_model)
            self.db.commit()
        return session_model

    def find_by_token(self, token: str) -> Optional[models.AuthSession]:
        with translate_db_errors(self.db, "loading session"):
            return self.db.query(models.AuthSession).filter(models.AuthSession.token == token).first()

    def delete_by_token(self, token: str) -> bool:
        with translate_db_errors(self.db, "deleting session"):
            deleted = (
                self.db.query(models.AuthSession)
                .filter(models.AuthSession.token == token)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        return deleted > 0

    def delete_expired(self, now: datetime) -> int:
        with translate_db_errors(self.db, "purging expired sessions"):
            deleted = (
                self.db.query(models.AuthSession)
                .filter(models.AuthSession.expires_at <= now)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        return deleted
