from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from ..database import Base


class Project(Base):
    """
    하나의 계정이 단독으로 소유하는 프로젝트 레코드입니다.
    account_id는 생성 시 서버에서 지정되며 이후 변경되지 않습니다.
    """
    __tablename__ = "projects"
    id = Column(String(36), primary_key=True)
    account_id = Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, nullable=False, index=True)
    updated_at = Column(DateTime, nullable=False)

    account = relationship("Account", back_populates="projects")
