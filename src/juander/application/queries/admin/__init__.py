from juander.application.queries.admin.list_users_query import ListUsersQuery

__all__ = [
    "ListUsersQuery",
]
