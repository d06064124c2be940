from typing import Tuple, Union

import markdown

from cms.core.exceptions import UnsupportedKindError
from cms.domains.documents.entities import DocumentKind

PLAIN_CONTENT_TYPE = "text/plain"
HTML_CONTENT_TYPE = "text/html"


def render_markdown(text: str) -> str:
    """Преобразование markdown в HTML"""
    return markdown.markdown(text)


def render(name: str, content: bytes) -> Tuple[str, Union[bytes, str]]:
    """Тип содержимого и тело ответа в зависимости от типа документа"""
    kind = DocumentKind.from_name(name)

    if kind is DocumentKind.PLAIN:
        return PLAIN_CONTENT_TYPE, content
    if kind is DocumentKind.MARKDOWN:
        return HTML_CONTENT_TYPE, render_markdown(content.decode("utf-8", errors="replace"))

    raise UnsupportedKindError(name)
