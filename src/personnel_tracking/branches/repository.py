from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, Sequence

from .model import Branch


class BranchRepository(Protocol):
    def list_active(self) -> Sequence[Branch]:
        raise NotImplementedError

    def get_by_id(self, branch_id: str) -> Optional[Branch]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        address: Optional[str],
        phone: Optional[str],
        parent_branch_id: Optional[str],
        manager_id: Optional[str],
        is_active: bool,
    ) -> Branch:
        raise NotImplementedError

    def update(self, branch_id: str, changes: Dict[str, Any]) -> Optional[Branch]:
        """Apply a partial update; None if the branch does not exist."""
        raise NotImplementedError
