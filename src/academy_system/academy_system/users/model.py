from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User account (any role).

    Plain data object, no database access.
    """

    user_id: int
    name: str
    email: str
    phone: Optional[str]
    password_hash: str
    role: Role
    is_active: bool = True
