from __future__ import annotations

from enum import Enum


class UserRole(str, Enum):
    """Roles decide what a signed-in user may see and change."""

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    BRANCH_ADMIN = "branch_admin"


class ShiftType(str, Enum):
    SABAH = "sabah"
    OGLEN = "oglen"
    AKSAM = "aksam"
    GECE = "gece"


class LeaveType(str, Enum):
    YILLIK = "yillik"
    HAFTA_TATILI = "hafta_tatili"
    RESMI_TATIL = "resmi_tatil"
    HASTALIK = "hastalik"
    DOGUM = "dogum"
    BABALIK = "babalik"
    EVLILIK = "evlilik"
    OLUM = "olum"
    MAZERET = "mazeret"
    UCRETSIZ = "ucretsiz"


class LeaveStatus(str, Enum):
    """State of the leave approval flow."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ScanAction(str, Enum):
    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"
