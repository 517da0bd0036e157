"""Command layer - write operations that mutate state.

Commands are organized by domain:
- admin: Role management reserved for the super admin
"""

from juander.application.commands.admin import UpdateUserRoleCommand

__all__ = [
    "UpdateUserRoleCommand",
]
