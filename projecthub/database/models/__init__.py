from .account import Account
from .session import AuthSession
from .project import Project

__all__ = ["Account", "AuthSession", "Project"]
