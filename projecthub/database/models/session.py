from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from ..database import Base


class AuthSession(Base):
    """
    로그인 시 발급되는 서버 측 세션입니다.
    token 자체가 기본 키이며, expires_at 이전에만 유효합니다.
    ORM 세션(sqlalchemy.orm.Session)과 구분하기 위해 AuthSession으로 명명합니다.
    """
    __tablename__ = "sessions"
    token = Column(String(64), primary_key=True)
    account_id = Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)

    account = relationship("Account", back_populates="sessions")

    def __repr__(self):
        return f"<AuthSession account_id={self.account_id!r} expires_at={self.expires_at!r}>"
