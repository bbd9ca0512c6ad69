from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from projecthub.database import models

class IAuthSessionRepository(ABC):
    @abstractmethod
    def create(self, session_model: models.AuthSession) -> models.AuthSession:
        """새로운 세션을 저장합니다."""
        pass

    @abstractmethod
    def find_by_token(self, token: str) -> Optional[models.AuthSession]:
        """토큰으로 세션을 조회합니다. 만료 여부는 판단하지 않습니다."""
        pass

    @abstractmethod
    def delete_by_token(self, token: str) -> bool:
        """토큰에 해당하는 세션을 삭제합니다. 삭제된 행이 있으면 True."""
        pass

    @abstractmethod
    def delete_expired(self, now: datetime) -> int:
        """expires_at <= now 인 세션을 모두 삭제하고 삭제된 개수를 반환합니다."""
        pass
