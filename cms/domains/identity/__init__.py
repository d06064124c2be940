from cms.domains.identity.entities import User

__all__ = ["User"]
