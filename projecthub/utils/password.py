"""Password hashing utilities.

Argon2id(메모리 하드 함수)로 비밀번호를 해시합니다. 인코딩된 해시 문자열에
솔트와 파라미터가 함께 들어 있으므로 별도 컬럼이 필요 없습니다.
"""
import secrets
from functools import lru_cache

from argon2 import PasswordHasher
from argon2.exceptions import HashingError, InvalidHashError, VerificationError, VerifyMismatchError

from projecthub.services.exceptions import InternalError

DEFAULT_HASHER = PasswordHasher()


def hash_password(password: str, hasher: PasswordHasher = DEFAULT_HASHER) -> str:
    """호출할 때마다 새 솔트로 해시합니다."""
    try:
        return hasher.hash(password)
    except HashingError as e:
        raise InternalError("Password hashing failed.") from e


def verify_password(password: str, password_hash: str, hasher: PasswordHasher = DEFAULT_HASHER) -> bool:
    """
    비밀번호가 해시와 일치하면 True, 불일치하면 False를 반환합니다.

    Raises:
        InternalError: 저장된 해시 문자열이 Argon2 형식이 아닐 때.
    """
    try:
        return hasher.verify(password_hash, password)
    except VerifyMismatchError:
        return False
    except InvalidHashError as e:
        raise InternalError("Stored password hash is malformed.") from e
    except VerificationError:
        return False


@lru_cache(maxsize=None)
def _dummy_hash_for(time_cost, memory_cost, parallelism, hash_len, salt_len, hash_type) -> str:
    hasher = PasswordHasher(time_cost, memory_cost, parallelism, hash_len, salt_len, type=hash_type)
    return hasher.hash(secrets.token_urlsafe(16))


def prepare_dummy_hash(hasher: PasswordHasher) -> str:
    """
    해셔와 같은 비용 파라미터의 더미 해시를 반환합니다. 파라미터 조합마다 프로세스당 한 번만 계산되므로,
    해셔를 만들 때 미리 호출해 두면 로그인 요청 중에는 hash()가 실행되지 않습니다.
    """
    return _dummy_hash_for(
        hasher.time_cost, hasher.memory_cost, hasher.parallelism,
        hasher.hash_len, hasher.salt_len, hasher.type,
    )


def verify_dummy(password: str, hasher: PasswordHasher = DEFAULT_HASHER) -> bool:
    """
    존재하지 않는 계정으로 로그인할 때 호출합니다.
    실제 계정과 같은 파라미터의 해시를 한 번 검증하여 응답 시간을 맞춥니다. 항상 False입니다.
    """
    verify_password(password, prepare_dummy_hash(hasher), hasher)
    return False


# 기본 해셔의 더미 해시는 모듈 임포트 시점에 미리 계산합니다.
DUMMY_HASH = prepare_dummy_hash(DEFAULT_HASHER)
