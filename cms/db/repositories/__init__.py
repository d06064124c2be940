from cms.db.repositories.user_repository import UserRepository
from cms.db.repositories.document_repository import DocumentRepository

__all__ = [
    "UserRepository",
    "DocumentRepository",
]
