from __future__ import annotations

from typing import Any, Dict, Optional, Protocol


class SettingsRepository(Protocol):
    def get(self, key: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def save(self, key: str, document: Dict[str, Any]) -> None:
        raise NotImplementedError
