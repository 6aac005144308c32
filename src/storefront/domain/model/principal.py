"""The identity a request acts on behalf of.

Token verification happens outside the domain; whatever verified the
caller hands the application a Principal.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ForbiddenError, ValidationError


@dataclass(frozen=True)
class Principal:
    user_id: int
    is_admin: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.user_id, int) or self.user_id <= 0:
            raise ValidationError(f"Invalid user ID: {self.user_id!r}")

    def require_admin(self) -> None:
        if not self.is_admin:
            raise ForbiddenError("Admin access required")

    def can_view(self, owner_id: int) -> bool:
        return self.is_admin or self.user_id == owner_id
