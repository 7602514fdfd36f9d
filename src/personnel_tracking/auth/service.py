from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

from ..common.datetime_utils import utc_now
from ..common.validators import optional_str, require_enum
from ..core.constants import DEFAULT_TWO_FACTOR_TTL_MINUTES
from ..core.enums import UserRole
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    TwoFactorError,
    UpstreamError,
    ValidationError,
)
from ..sms.gateway import SmsGateway
from ..users.model import User
from ..users.passwords import hash_password, verify_password
from ..users.repository import UserRepository
from .two_factor import codes_match, generate_two_factor_code

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Telefon numarası veya şifre hatalı"
NO_PENDING_CODE = "Doğrulama kodu bulunamadı"
EXPIRED_CODE = "Doğrulama kodu süresi dolmuş"
WRONG_CODE = "Doğrulama kodu hatalı"


@dataclass(frozen=True)
class TwoFactorChallenge:
    """Result of a successful password check: a code is pending, no session yet."""

    user_id: str
    sms_sent: bool

    def to_json(self) -> dict:
        return {
            "message": "Doğrulama kodu telefon numaranıza gönderildi",
            "requiresTwoFactor": True,
            "userId": self.user_id,
        }


class AuthService:
    """Use cases: register, password check + code issuance, code verification."""

    def __init__(
        self,
        users: UserRepository,
        sms: SmsGateway,
        *,
        code_ttl: timedelta = timedelta(minutes=DEFAULT_TWO_FACTOR_TTL_MINUTES),
        sms_strict: bool = False,
        clock: Callable[[], datetime] = utc_now,
        code_generator: Callable[[], str] = generate_two_factor_code,
    ):
        self._users = users
        self._sms = sms
        self._code_ttl = code_ttl
        self._sms_strict = sms_strict
        self._clock = clock
        self._code_generator = code_generator

    def register(
        self,
        *,
        phone: Any,
        password: Any,
        name: Any,
        role: Any = None,
        branch_id: Any = None,
        acting_user: Optional[User] = None,
    ) -> User:
        phone = optional_str(phone)
        name = optional_str(name)
        if not phone or not password or not name:
            raise ValidationError("Telefon, şifre ve ad alanları zorunludur")

        user_role = require_enum(role or UserRole.BRANCH_ADMIN.value, UserRole, "Rol")
        # Anonymous sign-up is limited to branch_admin (DESIGN.md, "Registration roles").
        if user_role != UserRole.BRANCH_ADMIN:
            if acting_user is None or acting_user.role != UserRole.SUPER_ADMIN:
                raise AuthorizationError("Bu rolde kullanıcı oluşturma yetkiniz bulunmamaktadır")

        if self._users.get_by_phone(phone):
            raise ConflictError("Bu telefon numarası zaten kullanılıyor")

        try:
            user = self._users.create_user(
                phone=phone,
                password_hash=hash_password(str(password)),
                name=name,
                role=user_role,
                branch_id=optional_str(branch_id),
            )
        except ConflictError:
            raise ConflictError("Bu telefon numarası zaten kullanılıyor")

        logger.info(
            "User registered (id=%s, role=%s, by=%s)",
            user.id,
            user.role.value,
            acting_user.id if acting_user else "self",
        )
        return user

    def authenticate(self, phone: Any, password: Any) -> User:
        phone = optional_str(phone)
        if not phone or not password:
            raise AuthenticationError(INVALID_CREDENTIALS)

        user = self._users.get_by_phone(phone)
        if not user or not user.is_active or not verify_password(str(password), user.password_hash):
            logger.info("Login rejected (phone=%s)", phone)
            raise AuthenticationError(INVALID_CREDENTIALS)
        return user

    def issue_code(self, user: User) -> TwoFactorChallenge:
        code = self._code_generator()
        expiry = self._clock() + self._code_ttl
        self._users.set_two_factor(user.id, code=code, expiry=expiry)
        logger.info("2FA code issued (user=%s, expires=%s)", user.id, expiry.isoformat())

        sent = self._sms.send_two_factor(user.phone, code)
        if not sent:
            logger.error("2FA SMS could not be delivered (user=%s)", user.id)
            if self._sms_strict:
                raise UpstreamError("Doğrulama kodu gönderilemedi, lütfen tekrar deneyin")
        return TwoFactorChallenge(user_id=user.id, sms_sent=sent)

    def begin_login(self, phone: Any, password: Any) -> TwoFactorChallenge:
        user = self.authenticate(phone, password)
        return self.issue_code(user)

    def verify_two_factor(self, user_id: Any, code: Any) -> User:
        user_id = optional_str(user_id)
        # Compared as submitted; padded input is a wrong code.
        code = None if code is None else str(code)
        if not user_id or not code:
            raise ValidationError("Kullanıcı ID ve doğrulama kodu gerekli")

        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("Kullanıcı bulunamadı")

        if not user.two_factor_code or user.two_factor_expiry is None:
            logger.info("2FA rejected: no pending code (user=%s)", user.id)
            raise TwoFactorError(NO_PENDING_CODE)

        if self._clock() > user.two_factor_expiry:
            logger.info("2FA rejected: code expired (user=%s)", user.id)
            raise TwoFactorError(EXPIRED_CODE)

        if not codes_match(user.two_factor_code, code):
            logger.info("2FA rejected: wrong code (user=%s)", user.id)
            raise TwoFactorError(WRONG_CODE)

        # Only one concurrent verification of the same code may clear it.
        if not self._users.consume_two_factor(user.id, code=user.two_factor_code):
            logger.info("2FA rejected: code already consumed or replaced (user=%s)", user.id)
            raise TwoFactorError(NO_PENDING_CODE)

        logger.info("2FA verified (user=%s)", user.id)
        return user

    def get_active_user(self, user_id: Optional[str]) -> Optional[User]:
        if not user_id:
            return None
        user = self._users.get_by_id(user_id)
        if not user or not user.is_active:
            return None
        return user
