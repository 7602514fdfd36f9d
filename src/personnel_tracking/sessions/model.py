from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict


@dataclass(frozen=True)
class StoredSession:
    sid: str
    expires_at: datetime
    data: Dict[str, Any] = field(default_factory=dict)
