"""Domain entity representing an authenticated caller."""

from dataclasses import dataclass

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Principal:
    """Identity resolved from a verified end-user token."""

    id: str
    role: str | None = None

    def has_role(self, alias: str) -> bool:
        """Return ``True`` when the principal's role matches ``alias``."""

        return (self.role or "").lower() == alias.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the principal is an administrator."""

        return self.has_role(ADMIN_ROLE)

    def can_manage(self, user_id: str) -> bool:
        """Owners and administrators may act on a user's notifications."""

        return self.id == user_id or self.is_admin()


__all__ = ["ADMIN_ROLE", "Principal"]
