from dataclasses import dataclass
from http.cookies import SimpleCookie, CookieError
from typing import Optional

from projecthub.services.exceptions import UnauthenticatedError
from projecthub.services.session_service import SessionService

SESSION_COOKIE_NAME = "projecthub_session"


@dataclass(frozen=True)
class AuthContext:
    """인증된 요청의 실행 컨텍스트. 리소스 서비스 호출에는 여기의 account_id만 사용합니다."""
    account_id: str
    token: str


def read_session_cookie(environ) -> Optional[str]:
    """WSGI environ의 Cookie 헤더에서 세션 토큰을 꺼냅니다. 없거나 파싱할 수 없으면 None."""
    raw = environ.get("HTTP_COOKIE")
    if not raw:
        return None
    cookie = SimpleCookie()
    try:
        cookie.load(raw)
    except CookieError:
        return None
    morsel = cookie.get(SESSION_COOKIE_NAME)
    return morsel.value if morsel and morsel.value else None


class AuthorizationGuard:
    """보호된 요청의 세션 토큰을 계정 ID로 해석하거나, 리소스 접근 전에 요청을 거부합니다."""

    def __init__(self, session_service: SessionService):
        self.session_service = session_service

    def authorize(self, token: Optional[str]) -> AuthContext:
        """
        Raises:
            UnauthenticatedError: 토큰이 없거나 세션 검증에 실패했을 때.
        """
        if not token:
            raise UnauthenticatedError("Authentication required.")
        account_id = self.session_service.validate(token)
        return AuthContext(account_id=account_id, token=token)

    def authorize_request(self, environ) -> AuthContext:
        return self.authorize(read_session_cookie(environ))
