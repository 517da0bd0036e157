"""Query layer - read operations.

Queries are organized by domain:
- admin: User listing for administrators
"""

from juander.application.queries.admin import ListUsersQuery

__all__ = [
    "ListUsersQuery",
]
