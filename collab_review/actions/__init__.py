"""Utilities for handling review-card button payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

APPROVE_CONTROL_ID = "approve"
DENY_CONTROL_ID = "deny"
CONTROL_DELIMITER = "|"


@dataclass(frozen=True)
class ControlContext:
    """Parsed ``custom_id`` of a pressed review-card button."""

    control_id: str
    user_id: str | None = None


def build_control_id(control_id: str, user_id: str | None = None) -> str:
    if user_id:
        return f"{control_id}{CONTROL_DELIMITER}{user_id}"
    return control_id


def parse_control_id(raw_value: str) -> ControlContext:
    """Split a button ``custom_id`` into the control and optional submitter id."""

    parts = (raw_value or "").split(CONTROL_DELIMITER)
    user_id = parts[1] if len(parts) > 1 else None
    return ControlContext(control_id=parts[0], user_id=user_id or None)


def is_staff_member(member_roles: Iterable[str], staff_role_ids: Iterable[str]) -> bool:
    """Return True when no staff roles are configured or the member holds one."""

    staff = {item.strip() for item in staff_role_ids if item and item.strip()}
    if not staff:
        return True
    return any(role in staff for role in member_roles)
