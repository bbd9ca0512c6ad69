from datetime import datetime
from typing import List, Optional, Dict, Any
from sqlalchemy.orm import Session
from projecthub.database import models
from projecthub.repositories.interfaces import IProjectRepository
from projecthub.repositories.sqlalchemy.errors import translate_db_errors

class SqlalchemyProjectRepository(IProjectRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def _owned(self, account_id: str, project_id: str):
        return self.db.query(models.Project).filter(
            models.Project.id == project_id,
            models.Project.account_id == account_id,
        )

    def create(self, project_model: models.Project) -> models.Project:
        with translate_db_errors(self.db, "creating project"):
            self.db.add(project_model)
            self.db.commit()
        return project_model

    def find_owned(self, account_id: str, project_id: str) -> Optional[models.Project]:
        with translate_db_errors(self.db, "loading project"):
            return self._owned(account_id, project_id).first()

    def exists(self, project_id: str) -> bool:
        with translate_db_errors(self.db, "checking project existence"):
            return self.db.query(models.Project.id).filter(models.Project.id == project_id).first() is not None

    def list_by_account(self, account_id: str) -> List[models.Project]:
        with translate_db_errors(self.db, "listing projects"):
            return (
                self.db.query(models.Project)
                .filter(models.Project.account_id == account_id)
                .order_by(models.Project.created_at.asc(), models.Project.id.asc())
                .all()
            )

    def update_owned(self, account_id: str, project_id: str, values: Dict[str, Any], updated_at: datetime) -> Optional[models.Project]:
        with translate_db_errors(self.db, "updating project"):
            # 소유권 확인과 변경을 하나의 조건부 UPDATE로 처리 (TOCTOU 방지)
            updated = self._owned(account_id, project_id).update(
                {**values, "updated_at": updated_at}, synchronize_session=False
            )
            if updated == 0:
                self.db.rollback()
                return None
            project = self._owned(account_id, project_id).populate_existing().first()
            self.db.commit()
        return project

    def delete_owned(self, account_id: str, project_id: str) -> bool:
        with translate_db_errors(self.db, "deleting project"):
            deleted = self._owned(account_id, project_id).delete(synchronize_session=False)
            self.db.commit()
        return deleted > 0
