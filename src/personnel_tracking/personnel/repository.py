from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, Sequence

from .model import Personnel


class PersonnelRepository(Protocol):
    def list_active(self, *, branch_id: Optional[str] = None) -> Sequence[Personnel]:
        raise NotImplementedError

    def search(self, term: str) -> Sequence[Personnel]:
        """Active personnel whose "first last" contains `term`, case-insensitively."""
        raise NotImplementedError

    def get_by_id(self, personnel_id: str) -> Optional[Personnel]:
        raise NotImplementedError

    def create(self, fields: Dict[str, Any]) -> Personnel:
        raise NotImplementedError

    def update(self, personnel_id: str, changes: Dict[str, Any]) -> Optional[Personnel]:
        raise NotImplementedError

    def count_active(self) -> int:
        raise NotImplementedError
