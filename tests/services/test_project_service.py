# tests/services/test_project_service.py
import pytest
from datetime import datetime
from unittest.mock import MagicMock, patch, ANY

from projecthub.services.project_service import ProjectService
from projecthub.services.exceptions import *
from projecthub.repositories.interfaces import IProjectRepository
from projecthub.database import models

NOW = datetime(2026, 1, 1, 9, 30, 0)

# ===================================================================
#  Fixture 설정
# ===================================================================

@pytest.fixture
def mock_project_repo() -> MagicMock:
    """IProjectRepository에 대한 모의 객체를 생성합니다."""
    repo = MagicMock(spec=IProjectRepository)
    repo.create.side_effect = lambda project: project
    return repo

@pytest.fixture
def project_service(mock_project_repo: MagicMock) -> ProjectService:
    return ProjectService(mock_project_repo)

def make_project(project_id="p-1", account_id="alice", name="P1", description=""):
    return models.Project(
        id=project_id, account_id=account_id, name=name, description=description,
        created_at=NOW, updated_at=NOW,
    )

# ===================================================================
#  생성/조회 테스트
# ===================================================================
class TestCreateAndList:
    @patch("projecthub.services.project_service.utcnow", return_value=NOW)
    def test_create_project_success(self, _mock_now, project_service: ProjectService, mock_project_repo: MagicMock):
        """프로젝트 생성 시 소유자는 인자로 받은 account_id이며 두 시각이 동일해야 합니다."""
        # === Act ===
        project = project_service.create("alice", "  P1  ", "first")

        # === Assert ===
        mock_project_repo.create.assert_called_once_with(ANY)
        assert project["account_id"] == "alice"
        assert project["name"] == "P1"
        assert project["description"] == "first"
        assert project["created_at"] == project["updated_at"] == NOW.isoformat()
        assert project["id"]

    def test_create_project_defaults_description(self, project_service: ProjectService):
        assert project_service.create("alice", "P1")["description"] == ""

    @pytest.mark.parametrize("name", ["", "   ", None, 42])
    def test_create_project_requires_name(self, project_service: ProjectService, mock_project_repo: MagicMock, name):
        with pytest.raises(ValidationError) as exc_info:
            project_service.create("alice", name)
        assert exc_info.value.field == "name"
        mock_project_repo.create.assert_not_called()

    def test_create_project_rejects_overlong_name(self, project_service: ProjectService):
        with pytest.raises(ValidationError):
            project_service.create("alice", "x" * 256)

    def test_list_projects_is_scoped_to_account(self, project_service: ProjectService, mock_project_repo: MagicMock):
        mock_project_repo.list_by_account.return_value = [make_project("p-1"), make_project("p-2", name="P2")]

        projects = project_service.list("alice")

        assert [p["id"] for p in projects] == ["p-1", "p-2"]
        mock_project_repo.list_by_account.assert_called_once_with("alice")

    def test_get_project_success(self, project_service: ProjectService, mock_project_repo: MagicMock):
        mock_project_repo.find_owned.return_value = make_project()

        assert project_service.get("alice", "p-1")["id"] == "p-1"
        mock_project_repo.find_owned.assert_called_once_with("alice", "p-1")

    def test_get_project_of_other_account_is_forbidden(self, project_service: ProjectService, mock_project_repo: MagicMock):
        mock_project_repo.find_owned.return_value = None
        mock_project_repo.exists.return_value = True

        with pytest.raises(ProjectForbiddenError):
            project_service.get("bob", "p-1")

# ===================================================================
#  수정(update) 테스트
# ===================================================================
class TestUpdate:
    @patch("projecthub.services.project_service.utcnow", return_value=NOW)
    def test_update_applies_only_supplied_fields(self, _mock_now, project_service: ProjectService, mock_project_repo: MagicMock):
        mock_project_repo.update_owned.return_value = make_project(name="Renamed")

        project = project_service.update("alice", "p-1", {"name": " Renamed "})

        assert project["name"] == "Renamed"
        mock_project_repo.update_owned.assert_called_once_with("alice", "p-1", {"name": "Renamed"}, NOW)

    def test_update_description_only(self, project_service: ProjectService, mock_project_repo: MagicMock):
        mock_project_repo.update_owned.return_value = make_project(description="new")

        project_service.update("alice", "p-1", {"description": "new"})

        assert mock_project_repo.update_owned.call_args.args[2] == {"description": "new"}

    @pytest.mark.parametrize("fields", [{}, {"account_id": "bob"}, {"name": ""}, {"description": 5}, ["name"]])
    def test_update_rejects_invalid_fields(self, project_service: ProjectService, mock_project_repo: MagicMock, fields):
        """소유자(account_id) 변경 시도를 포함해 허용되지 않은 입력은 모두 ValidationError입니다."""
        with pytest.raises(ValidationError):
            project_service.update("alice", "p-1", fields)
        mock_project_repo.update_owned.assert_not_called()

    def test_update_missing_project(self, project_service: ProjectService, mock_project_repo: MagicMock):
        mock_project_repo.update_owned.return_value = None
        mock_project_repo.exists.return_value = False

        with pytest.raises(ProjectNotFoundError):
            project_service.update("alice", "p-404", {"name": "x"})

    def test_update_project_of_other_account(self, project_service: ProjectService, mock_project_repo: MagicMock):
        mock_project_repo.update_owned.return_value = None
        mock_project_repo.exists.return_value = True

        with pytest.raises(ProjectForbiddenError) as exc_info:
            project_service.update("bob", "p-1", {"name": "hijack"})
        # 외부 메시지는 '찾을 수 없음'과 동일해야 합니다.
        assert "not found" in exc_info.value.message

# ===================================================================
#  삭제(delete) 테스트
# ===================================================================
class TestDelete:
    def test_delete_success(self, project_service: ProjectService, mock_project_repo: MagicMock):
        mock_project_repo.delete_owned.return_value = True

        assert project_service.delete("alice", "p-1") is None
        mock_project_repo.delete_owned.assert_called_once_with("alice", "p-1")
        mock_project_repo.exists.assert_not_called()

    def test_second_delete_is_not_found(self, project_service: ProjectService, mock_project_repo: MagicMock):
        mock_project_repo.delete_owned.return_value = False
        mock_project_repo.exists.return_value = False

        with pytest.raises(ProjectNotFoundError):
            project_service.delete("alice", "p-1")

    def test_delete_project_of_other_account(self, project_service: ProjectService, mock_project_repo: MagicMock):
        mock_project_repo.delete_owned.return_value = False
        mock_project_repo.exists.return_value = True

        with pytest.raises(ProjectForbiddenError):
            project_service.delete("bob", "p-1")
