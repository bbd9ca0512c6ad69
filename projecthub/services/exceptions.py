# projecthub/services/exceptions.py
from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """서비스 계층에서 발생할 수 있는 오류 종류의 닫힌 집합입니다."""
    VALIDATION = "validation"
    DUPLICATE_EMAIL = "duplicate_email"
    INVALID_CREDENTIALS = "invalid_credentials"
    UNAUTHENTICATED = "unauthenticated"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    DATABASE = "database"
    INTERNAL = "internal"


class ServiceError(Exception):
    """모든 서비스 예외의 기반 클래스. 하위 클래스는 반드시 kind를 지정합니다."""
    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


# --- Validation Exceptions ---
class ValidationError(ServiceError):
    """입력값이 비어 있거나 형식이 잘못되었을 때"""
    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


# --- Auth Exceptions ---
class DuplicateEmailError(ServiceError):
    """정규화된 이메일로 이미 계정이 존재할 때"""
    kind = ErrorKind.DUPLICATE_EMAIL


class InvalidCredentialsError(ServiceError):
    """이메일 또는 비밀번호가 일치하지 않을 때 (두 경우를 구분하지 않음)"""
    kind = ErrorKind.INVALID_CREDENTIALS


class UnauthenticatedError(ServiceError):
    """세션 토큰이 없거나, 알 수 없거나, 만료/폐기되었을 때"""
    kind = ErrorKind.UNAUTHENTICATED


# --- Project Exceptions ---
class ProjectNotFoundError(ServiceError):
    """프로젝트를 찾을 수 없을 때"""
    kind = ErrorKind.NOT_FOUND


class ProjectForbiddenError(ServiceError):
    """프로젝트는 존재하지만 호출한 계정의 소유가 아닐 때 (외부에는 NOT_FOUND로 노출)"""
    kind = ErrorKind.FORBIDDEN


# --- Infrastructure Exceptions ---
class DatabaseError(ServiceError):
    """연결, 타임아웃, 분류되지 않은 제약 조건 위반 등 저장소 계층 오류"""
    kind = ErrorKind.DATABASE


class InternalError(ServiceError):
    """해시 실패 등 불변식 위반. 버그 신호로 취급합니다."""
    kind = ErrorKind.INTERNAL
