import enum
import os
from typing import Optional

DUPLICATE_SUFFIX = "-dup"


class DocumentKind(enum.Enum):
    """Тип документа, определяется только расширением имени"""

    PLAIN = ".txt"
    MARKDOWN = ".md"

    @classmethod
    def from_name(cls, name: str) -> Optional["DocumentKind"]:
        """Тип по последнему расширению имени, None для неизвестных"""
        _, ext = os.path.splitext(name)
        for kind in cls:
            if kind.value == ext:
                return kind
        return None


def duplicate_name(name: str) -> str:
    """Имя копии: суффикс вставляется перед последним расширением"""
    stem, ext = os.path.splitext(name)
    return f"{stem}{DUPLICATE_SUFFIX}{ext}"


class Document:
    """Сущность документа"""

    def __init__(self, name: str, content: bytes = b""):
        self.name = name
        self.content = content
        self.kind = DocumentKind.from_name(name)

    def get_content_length(self) -> int:
        """Размер содержимого в байтах"""
        return len(self.content)

    def get_text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def get_word_count(self) -> int:
        """Подсчет количества слов в документе"""
        text = self.get_text()
        if not text.strip():
            return 0
        return len(text.split())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Document):
            return False
        return self.name == other.name and self.content == other.content

    def __repr__(self) -> str:
        kind = self.kind.name if self.kind else None
        return f"Document(name={self.name}, kind={kind}, length={self.get_content_length()})"
