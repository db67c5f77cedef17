# bookstore/domain/principal.py
from dataclasses import dataclass
from uuid import UUID

from bookstore.domain.enums import UserRole


@dataclass(frozen=True)
class Principal:
    """Authenticated caller, resolved once per request and passed down explicitly."""

    user_id: UUID
    role: UserRole = UserRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
