"""Capability checks derived from the stored record and configuration."""

from juander.domain.user.aggregates.user import User
from juander.domain.user.value_objects import UserRole


class AccessPolicy:
    """Decide what a user may do.

    The super-admin is identified by a configured email address and is
    never stored as a flag, so the grant cannot be lost by editing roles.

    Parameters
    ----------
    super_admin_email
        Exact email of the super-admin account. Empty disables it.
    """

    def __init__(self, super_admin_email: str = ""):
        self._super_admin_email = super_admin_email.strip()

    def is_super_admin_email(self, email: str) -> bool:
        return bool(self._super_admin_email) and email == self._super_admin_email

    def is_super_admin(self, user: User) -> bool:
        return self.is_super_admin_email(user.email)

    def has_admin_access(self, user: User) -> bool:
        """Role admin, or the super-admin whatever its stored role."""
        return user.role == UserRole.ADMIN or self.is_super_admin(user)

    def initial_role_for(self, email: str) -> UserRole:
        return UserRole.ADMIN if self.is_super_admin_email(email) else UserRole.TOURIST
