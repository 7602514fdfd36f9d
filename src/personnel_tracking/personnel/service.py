from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple

from ..common.validators import (
    optional_bool,
    optional_date,
    optional_int,
    optional_str,
    require_date,
    require_json_object,
    require_non_empty,
)
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..users.access import ensure_branch_access, scoped_branch_id
from ..users.model import User
from .model import Personnel
from .repository import PersonnelRepository

logger = logging.getLogger(__name__)

NOT_FOUND = "Personel bulunamadı"


def _national_id(value: Any, label: str) -> str:
    text = require_non_empty(value, label)
    if not re.fullmatch(r"\d{11}", text):
        raise ValidationError("TC kimlik numarası 11 haneli olmalıdır")
    return text


def _required_text(value: Any, label: str) -> str:
    return require_non_empty(value, label)


def _optional_text(value: Any, label: str) -> Optional[str]:
    return optional_str(value)


def _active_flag(value: Any, label: str) -> bool:
    flag = optional_bool(value, label)
    return True if flag is None else flag


# JSON key -> (domain field, label, parser, required on create)
_FIELDS: Dict[str, Tuple[str, str, Callable[[Any, str], Any], bool]] = {
    "employeeNumber": ("employee_number", "Sicil numarası", _required_text, True),
    "firstName": ("first_name", "Ad", _required_text, True),
    "lastName": ("last_name", "Soyad", _required_text, True),
    "phone": ("phone", "Telefon", _required_text, True),
    "nationalId": ("national_id", "TC kimlik numarası", _national_id, True),
    "position": ("position", "Pozisyon", _required_text, True),
    "branchId": ("branch_id", "Şube", _required_text, True),
    "startDate": ("start_date", "İşe başlama tarihi", require_date, True),
    "email": ("email", "E-posta", _optional_text, False),
    "birthDate": ("birth_date", "Doğum tarihi", optional_date, False),
    "address": ("address", "Adres", _optional_text, False),
    "department": ("department", "Departman", _optional_text, False),
    "salary": ("salary", "Maaş", optional_int, False),
    "isActive": ("is_active", "Aktiflik", _active_flag, False),
}


def _parse_fields(data: Mapping[str, Any], *, partial: bool) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, (field_name, label, parser, required) in _FIELDS.items():
        if key not in data and (partial or not required):
            continue
        out[field_name] = parser(data.get(key), label)
    return out


class PersonnelService:
    def __init__(self, personnel: PersonnelRepository):
        self._personnel = personnel

    def list_personnel(
        self,
        *,
        user: User,
        search: Optional[str] = None,
        branch_id: Optional[str] = None,
    ) -> Sequence[Personnel]:
        search = optional_str(search)
        if search:
            return self._personnel.search(search)
        branch_id = optional_str(branch_id)
        if branch_id:
            return self._personnel.list_active(branch_id=branch_id)
        return self._personnel.list_active(branch_id=scoped_branch_id(user))

    def get_personnel(self, personnel_id: str, *, user: User) -> Personnel:
        person = self._personnel.get_by_id(personnel_id)
        if not person:
            raise NotFoundError(NOT_FOUND)
        ensure_branch_access(user, person.branch_id, "Bu personeli görme yetkiniz bulunmamaktadır")
        return person

    def create_personnel(self, payload: Any, *, user: User) -> Personnel:
        fields = _parse_fields(require_json_object(payload), partial=False)
        ensure_branch_access(user, fields["branch_id"], "Başka şubeye personel ekleyemezsiniz")
        fields.setdefault("is_active", True)

        try:
            person = self._personnel.create(fields)
        except ConflictError:
            raise ConflictError("Bu sicil numarası veya TC kimlik numarası zaten kayıtlı")

        logger.info("Personnel created (id=%s, branch=%s, by=%s)", person.id, person.branch_id, user.id)
        return person

    def update_personnel(self, personnel_id: str, payload: Any, *, user: User) -> Personnel:
        existing = self._personnel.get_by_id(personnel_id)
        if not existing:
            raise NotFoundError(NOT_FOUND)
        ensure_branch_access(user, existing.branch_id, "Bu personeli düzenleme yetkiniz bulunmamaktadır")

        changes = _parse_fields(require_json_object(payload), partial=True)
        if "branch_id" in changes:
            ensure_branch_access(user, changes["branch_id"], "Başka şubeye personel taşıyamazsınız")

        try:
            person = self._personnel.update(personnel_id, changes)
        except ConflictError:
            raise ConflictError("Bu sicil numarası veya TC kimlik numarası zaten kayıtlı")
        if person is None:
            raise NotFoundError(NOT_FOUND)
        return person
