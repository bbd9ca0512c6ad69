from abc import ABC, abstractmethod
from typing import Optional
from projecthub.database import models

class IAccountRepository(ABC):
    @abstractmethod
    def create(self, account_model: models.Account) -> models.Account:
        """
        새로운 계정을 저장합니다.

        Raises:
            DuplicateEmailError: email UNIQUE 제약 조건에 위배될 때.
            DatabaseError: 그 밖의 저장소 오류.
        """
        pass

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[models.Account]:
        """정규화된 이메일로 계정을 조회합니다."""
        pass
