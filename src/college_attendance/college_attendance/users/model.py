from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: account.

    Note: Plain data object (no DB access code).
    """

    user_id: int
    username: str
    password_hash: str
    full_name: str
    email: str
    role: Role
    admission_number: Optional[str] = None
    staff_id: Optional[str] = None
    is_active: bool = True
