from .sqlalchemy_account_repository import SqlalchemyAccountRepository
from .sqlalchemy_session_repository import SqlalchemySessionRepository
from .sqlalchemy_project_repository import SqlalchemyProjectRepository

__all__ = ["SqlalchemyAccountRepository", "SqlalchemySessionRepository", "SqlalchemyProjectRepository"]
