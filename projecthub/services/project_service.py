import logging
import uuid
from typing import Dict, Any, List, Optional

from projecthub.database import models
from projecthub.repositories.interfaces import IProjectRepository
from projecthub.services.exceptions import (
    ValidationError, ProjectNotFoundError, ProjectForbiddenError
)
from projecthub.utils.time_utils import utcnow

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "description")
NAME_MAX_LENGTH = 255


def project_to_dict(project: models.Project) -> Dict[str, Any]:
    return {
        "id": project.id,
        "account_id": project.account_id,
        "name": project.name,
        "description": project.description,
        "created_at": project.created_at.isoformat(),
        "updated_at": project.updated_at.isoformat(),
    }


def _clean_name(name) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Project name must not be empty.", field="name")
    name = name.strip()
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(f"Project name must be at most {NAME_MAX_LENGTH} characters.", field="name")
    return name


def _clean_description(description) -> str:
    if description is None:
        return ""
    if not isinstance(description, str):
        raise ValidationError("Project description must be a string.", field="description")
    return description


class ProjectService:
    """
    계정 소유 프로젝트의 CRUD를 제공합니다.

    모든 메서드는 첫 번째 인자로 인증된 account_id를 필수로 받습니다.
    이 값은 AuthorizationGuard가 세션에서 해석한 값이며, 요청 본문에서 받지 않습니다.
    """

    def __init__(self, project_repo: IProjectRepository):
        self.project_repo = project_repo

    def create(self, account_id: str, name: str, description: Optional[str] = None) -> Dict[str, Any]:
        """
        새 프로젝트를 생성합니다. created_at과 updated_at은 같은 시각으로 설정됩니다.

        Raises:
            ValidationError: name이 비어 있을 때.
        """
        now = utcnow()
        project = models.Project(
            id=str(uuid.uuid4()),
            account_id=account_id,
            name=_clean_name(name),
            description=_clean_description(description),
            created_at=now,
            updated_at=now,
        )
        created = self.project_repo.create(project)
        logger.info("Project %s created by account %s.", created.id, account_id)
        return project_to_dict(created)

    def list(self, account_id: str) -> List[Dict[str, Any]]:
        """account_id가 소유한 프로젝트만 생성 시각 오름차순으로 반환합니다."""
        return [project_to_dict(p) for p in self.project_repo.list_by_account(account_id)]

    def get(self, account_id: str, project_id: str) -> Dict[str, Any]:
        """
        Raises:
            ProjectNotFoundError: 프로젝트가 없을 때.
            ProjectForbiddenError: 프로젝트가 다른 계정의 소유일 때.
        """
        project = self.project_repo.find_owned(account_id, project_id)
        if project is None:
            self._raise_missing(account_id, project_id)
        return project_to_dict(project)

    def update(self, account_id: str, project_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """
        전달된 필드(name, description)만 변경하고 updated_at을 갱신합니다.

        Raises:
            ValidationError: 변경할 필드가 없거나, 알 수 없는 필드가 있거나, name이 비어 있을 때.
            ProjectNotFoundError: 프로젝트가 없을 때.
            ProjectForbiddenError: 프로젝트가 다른 계정의 소유일 때.
        """
        if not isinstance(fields, dict):
            raise ValidationError("Request body must be a JSON object.")
        unknown = sorted(set(fields) - set(UPDATABLE_FIELDS))
        if unknown:
            raise ValidationError(f"Unknown field '{unknown[0]}'.", field=unknown[0])
        if not fields:
            raise ValidationError("At least one of 'name' or 'description' is required.")

        values = {}
        if "name" in fields:
            values["name"] = _clean_name(fields["name"])
        if "description" in fields:
            values["description"] = _clean_description(fields["description"])

        project = self.project_repo.update_owned(account_id, project_id, values, utcnow())
        if project is None:
            self._raise_missing(account_id, project_id)
        logger.info("Project %s updated by account %s.", project_id, account_id)
        return project_to_dict(project)

    def delete(self, account_id: str, project_id: str) -> None:
        """
        프로젝트를 삭제합니다. 이미 삭제된 ID를 다시 삭제하면 ProjectNotFoundError입니다.

        Raises:
            ProjectNotFoundError: 프로젝트가 없을 때.
            ProjectForbiddenError: 프로젝트가 다른 계정의 소유일 때.
        """
        if not self.project_repo.delete_owned(account_id, project_id):
            self._raise_missing(account_id, project_id)
        logger.info("Project %s deleted by account %s.", project_id, account_id)

    def _raise_missing(self, account_id: str, project_id: str):
        # 내부적으로는 '없음'과 '소유자 아님'을 구분합니다. 외부 노출 시에는 둘 다 404입니다.
        if self.project_repo.exists(project_id):
            logger.warning("Account %s attempted to access project %s it does not own.", account_id, project_id)
            raise ProjectForbiddenError(f"Project with id '{project_id}' not found.")
        raise ProjectNotFoundError(f"Project with id '{project_id}' not found.")
