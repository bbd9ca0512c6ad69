from sqlalchemy import Column, String, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from ..database import Base

EMAIL_UNIQUE_CONSTRAINT = "uq_accounts_email"


class Account(Base):
    """
    이메일/비밀번호로 로그인하는 계정을 나타냅니다.
    email은 소문자로 정규화된 값이 저장되며, 이름이 지정된 UNIQUE 제약(uq_accounts_email)으로 계정 중복을 막습니다.
    password_hash는 Argon2id 인코딩 문자열(솔트, 파라미터 포함)이며 외부로 노출되지 않습니다.
    """
    __tablename__ = "accounts"
    __table_args__ = (UniqueConstraint("email", name=EMAIL_UNIQUE_CONSTRAINT),)

    id = Column(String(36), primary_key=True)
    email = Column(String(320), nullable=False)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False)

    sessions = relationship("AuthSession", back_populates="account", cascade="all, delete-orphan")
    projects = relationship("Project", back_populates="account", cascade="all, delete-orphan")

    def __repr__(self):
        # password_hash는 로그에 찍히지 않도록 repr에서 제외합니다.
        return f"<Account id={self.id!r} email={self.email!r}>"
