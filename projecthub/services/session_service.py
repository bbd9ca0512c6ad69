import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional, Tuple

from projecthub.database import models
from projecthub.repositories.interfaces import IAuthSessionRepository
from projecthub.services.exceptions import UnauthenticatedError
from projecthub.utils.time_utils import utcnow

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL = timedelta(hours=24)
TOKEN_BYTES = 32  # 256비트


class SessionService:
    """
    서버 측 세션의 발급, 검증, 폐기를 담당합니다.
    세션 상태는 전부 DB에만 존재하며 프로세스 메모리에 캐시하지 않습니다.
    """

    def __init__(self, session_repo: IAuthSessionRepository, ttl: Optional[timedelta] = None):
        self.session_repo = session_repo
        self.ttl = ttl or DEFAULT_SESSION_TTL

    def create(self, account_id: str) -> Tuple[str, datetime]:
        """새 세션 토큰을 발급하고 (token, expires_at)을 반환합니다. 만료 시각은 발급 시점 + TTL로 고정됩니다."""
        now = utcnow()
        session = models.AuthSession(
            token=secrets.token_urlsafe(TOKEN_BYTES),
            account_id=account_id,
            created_at=now,
            expires_at=now + self.ttl,
        )
        self.session_repo.create(session)
        logger.debug("Session issued for account %s.", account_id)
        return session.token, session.expires_at

    def validate(self, token: str) -> str:
        """
        토큰이 유효하면 소유 계정 ID를 반환합니다. 만료 시각은 연장하지 않습니다.

        Raises:
            UnauthenticatedError: 토큰이 없거나, 알 수 없거나, 만료되었을 때.
        """
        if not token:
            raise UnauthenticatedError("Authentication required.")

        session = self.session_repo.find_by_token(token)
        if session is None:
            raise UnauthenticatedError("Session is invalid or has expired.")

        if utcnow() >= session.expires_at:
            # 만료는 검증 시점에 지연 판정하며, 관측된 만료 세션은 즉시 삭제합니다.
            self.session_repo.delete_by_token(token)
            raise UnauthenticatedError("Session is invalid or has expired.")

        return session.account_id

    def revoke(self, token: str) -> None:
        """세션을 삭제합니다. 이미 없는 토큰이어도 조용히 성공합니다."""
        if token:
            self.session_repo.delete_by_token(token)

    def purge_expired(self) -> int:
        return self.session_repo.delete_expired(utcnow())
