from abc import ABC, abstractmethod
from typing import List, Optional, Dict, Any
from datetime import datetime
from projecthub.database import models

class IProjectRepository(ABC):
    """
    모든 조회/변경 메서드는 소유 계정 ID(account_id)를 필수 인자로 받습니다.
    소유자가 아닌 계정의 프로젝트는 어떤 메서드로도 읽거나 변경할 수 없습니다.
    """

    @abstractmethod
    def create(self, project_model: models.Project) -> models.Project:
        """새로운 프로젝트를 데이터베이스에 생성합니다."""
        pass

    @abstractmethod
    def find_owned(self, account_id: str, project_id: str) -> Optional[models.Project]:
        """account_id가 소유한 project_id 프로젝트를 조회합니다."""
        pass

    @abstractmethod
    def exists(self, project_id: str) -> bool:
        """
        소유자와 무관하게 project_id가 존재하는지 확인합니다.
        조건부 변경이 0행일 때 '없음'과 '소유자 아님'을 내부적으로 구분하는 용도로만 사용합니다.
        """
        pass

    @abstractmethod
    def list_by_account(self, account_id: str) -> List[models.Project]:
        """account_id가 소유한 프로젝트를 created_at 오름차순으로 조회합니다."""
        pass

    @abstractmethod
    def update_owned(self, account_id: str, project_id: str, values: Dict[str, Any], updated_at: datetime) -> Optional[models.Project]:
        """
        (id, account_id)가 모두 일치하는 행만 하나의 트랜잭션에서 갱신하고 갱신된 모델을 반환합니다.

        Returns:
            갱신된 프로젝트. 조건에 맞는 행이 없으면 None.
        """
        pass

    @abstractmethod
    def delete_owned(self, account_id: str, project_id: str) -> bool:
        """(id, account_id)가 모두 일치하는 행을 삭제합니다. 삭제되었으면 True."""
        pass
