from .account import IAccountRepository
from .session import IAuthSessionRepository
from .project import IProjectRepository

__all__ = ["IAccountRepository", "IAuthSessionRepository", "IProjectRepository"]
