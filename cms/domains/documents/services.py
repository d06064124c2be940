import logging
from typing import List, Tuple, Union

from cms.core.exceptions import DocumentExistsError, DocumentNotFoundError
from cms.db.repositories.document_repository import DocumentRepository
from cms.domains.documents.entities import Document, duplicate_name
from cms.domains.documents.rendering import render
from cms.domains.validation import validate_document_name

logger = logging.getLogger(__name__)


class DocumentService:
    """Сервис для работы с документами"""

    def __init__(self, repository: DocumentRepository):
        self.document_repository = repository

    def list_documents(self) -> List[Document]:
        """Все документы каталога для отображения на главной странице"""
        documents = []
        for name in self.document_repository.list_names():
            try:
                documents.append(Document(name, self.document_repository.read(name)))
            except DocumentNotFoundError:
                # файл удален между перечислением и чтением
                continue
        return documents

    def list_names(self) -> List[str]:
        return self.document_repository.list_names()

    def exists(self, name: str) -> bool:
        return self.document_repository.exists(name)

    def get_document(self, name: str) -> Document:
        """Получение документа по имени"""
        return Document(name, self.document_repository.read(name))

    def read(self, name: str) -> bytes:
        return self.document_repository.read(name)

    def create_document(self, name: str) -> Document:
        """Создание пустого документа"""
        validate_document_name(name)

        if not self.document_repository.create(name):
            raise DocumentExistsError(name)

        logger.info(f"Document {name} created")
        return Document(name)

    def update_document(self, name: str, content: bytes) -> Document:
        """Полная замена содержимого документа"""
        validate_document_name(name)
        self.document_repository.write(name, content)

        logger.info(f"Document {name} updated ({len(content)} bytes)")
        return Document(name, content)

    def duplicate_document(self, name: str) -> Document:
        """Копия документа с именем вида <имя>-dup.<расширение>"""
        if not self.document_repository.exists(name):
            raise DocumentNotFoundError(name)

        target = duplicate_name(name)
        validate_document_name(target)

        if not self.document_repository.copy(name, target):
            raise DocumentExistsError(target)

        logger.info(f"Document {name} duplicated as {target}")
        return self.get_document(target)

    def delete_document(self, name: str) -> None:
        """Удаление документа"""
        self.document_repository.delete(name)
        logger.info(f"Document {name} deleted")

    def render_document(self, name: str) -> Tuple[str, Union[bytes, str]]:
        """Чтение и отрисовка документа: (content_type, body)"""
        return render(name, self.document_repository.read(name))
