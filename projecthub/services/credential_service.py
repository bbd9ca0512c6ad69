import logging
import re
import uuid

from argon2 import PasswordHasher

from projecthub.database import models
from projecthub.repositories.interfaces import IAccountRepository
from projecthub.services.exceptions import ValidationError, InvalidCredentialsError
from projecthub.utils.password import (
    DEFAULT_HASHER, hash_password, verify_password, verify_dummy, prepare_dummy_hash
)
from projecthub.utils.time_utils import utcnow

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password."


def normalize_email(email) -> str:
    """앞뒤 공백을 제거하고 소문자로 변환합니다."""
    return email.strip().lower() if isinstance(email, str) else ""


class CredentialService:
    """계정 생성(가입)과 이메일/비밀번호 검증(로그인)을 담당합니다."""

    def __init__(self, account_repo: IAccountRepository, hasher: PasswordHasher = DEFAULT_HASHER):
        """
        Args:
            account_repo: 계정 데이터에 접근하기 위한 리포지토리.
            hasher: Argon2 해셔. 테스트에서는 비용이 낮은 해셔를 주입합니다.
        """
        self.account_repo = account_repo
        self.hasher = hasher
        # 주입된 해셔도 생성 시점에 더미 해시를 준비하여, 없는 계정 로그인의 비용을 틀린 비밀번호와 같게 맞춥니다.
        prepare_dummy_hash(hasher)

    def signup(self, email: str, password: str) -> str:
        """
        새 계정을 생성하고 계정 ID를 반환합니다.

        이메일 중복 여부는 미리 조회하지 않고 저장소의 UNIQUE 제약 조건으로 판정합니다.
        (동시 가입 요청 사이의 경쟁 조건 방지)

        Raises:
            ValidationError: 이메일 형식이 잘못되었거나 비밀번호가 비어 있을 때.
            DuplicateEmailError: 정규화된 이메일로 계정이 이미 존재할 때.
            InternalError: 비밀번호 해시에 실패했을 때.
        """
        normalized = normalize_email(email)
        if not normalized:
            raise ValidationError("Email is required.", field="email")
        if not EMAIL_PATTERN.match(normalized):
            raise ValidationError("Email is malformed.", field="email")
        if not isinstance(password, str) or not password:
            raise ValidationError("Password is required.", field="password")

        account = models.Account(
            id=str(uuid.uuid4()),
            email=normalized,
            password_hash=hash_password(password, self.hasher),
            created_at=utcnow(),
        )
        created = self.account_repo.create(account)
        logger.info("Account %s signed up.", created.id)
        return created.id

    def login(self, email: str, password: str) -> str:
        """
        자격 증명을 검증하고 계정 ID를 반환합니다.

        계정이 없을 때도 더미 해시를 한 번 검증하여, '없는 계정'과 '틀린 비밀번호'가
        오류 종류와 응답 시간 모두에서 구분되지 않도록 합니다.

        Raises:
            InvalidCredentialsError: 계정이 없거나 비밀번호가 일치하지 않을 때.
            InternalError: 저장된 해시가 손상되었을 때.
        """
        password = password if isinstance(password, str) else ""
        account = self.account_repo.find_by_email(normalize_email(email))
        if account is None:
            verify_dummy(password, self.hasher)
            logger.info("Login rejected.")
            raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

        if not verify_password(password, account.password_hash, self.hasher):
            logger.info("Login rejected.")
            raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

        logger.info("Account %s logged in.", account.id)
        return account.id
