from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class Personnel:
    """A tracked employee. Its id is also the payload of the employee's QR badge."""

    id: str
    employee_number: str
    first_name: str
    last_name: str
    phone: str
    national_id: str
    position: str
    branch_id: str
    start_date: date
    email: Optional[str] = None
    birth_date: Optional[date] = None
    address: Optional[str] = None
    department: Optional[str] = None
    salary: Optional[int] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
