from juander.presentation.api.routers.account import router as account_router
from juander.presentation.api.routers.admin import router as admin_router
from juander.presentation.api.routers.auth import router as auth_router

__all__ = [
    "account_router",
    "admin_router",
    "auth_router",
]
