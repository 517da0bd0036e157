from juander.domain.user.services.access_policy import AccessPolicy

__all__ = ["AccessPolicy"]
