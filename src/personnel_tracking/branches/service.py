from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Sequence

from ..common.validators import optional_bool, optional_str, require_json_object, require_non_empty
from ..core.exceptions import NotFoundError
from .model import Branch
from .repository import BranchRepository

logger = logging.getLogger(__name__)

_OPTIONAL_TEXT_FIELDS = {
    "address": "address",
    "phone": "phone",
    "parentBranchId": "parent_branch_id",
    "managerId": "manager_id",
}


class BranchService:
    def __init__(self, branches: BranchRepository):
        self._branches = branches

    def list_branches(self) -> Sequence[Branch]:
        return self._branches.list_active()

    def create_branch(self, payload: Any) -> Branch:
        data = require_json_object(payload)
        is_active = optional_bool(data.get("isActive"), "isActive")
        branch = self._branches.create(
            name=require_non_empty(data.get("name"), "Şube adı"),
            address=optional_str(data.get("address")),
            phone=optional_str(data.get("phone")),
            parent_branch_id=optional_str(data.get("parentBranchId")),
            manager_id=optional_str(data.get("managerId")),
            is_active=True if is_active is None else is_active,
        )
        logger.info("Branch created (id=%s)", branch.id)
        return branch

    def update_branch(self, branch_id: str, payload: Any) -> Branch:
        data: Mapping[str, Any] = require_json_object(payload)
        changes: Dict[str, Any] = {}
        if "name" in data:
            changes["name"] = require_non_empty(data.get("name"), "Şube adı")
        for key, field_name in _OPTIONAL_TEXT_FIELDS.items():
            if key in data:
                changes[field_name] = optional_str(data.get(key))
        if "isActive" in data:
            changes["is_active"] = bool(optional_bool(data.get("isActive"), "isActive"))

        branch = self._branches.update(branch_id, changes)
        if branch is None:
            raise NotFoundError("Şube bulunamadı")
        return branch
