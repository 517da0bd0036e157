from juander.application.commands.admin.update_user_role_command import (
    UpdateUserRoleCommand,
)

__all__ = [
    "UpdateUserRoleCommand",
]
