from cms.domains.documents.entities import Document, DocumentKind, duplicate_name
from cms.domains.documents.rendering import render, render_markdown

__all__ = [
    "Document", "DocumentKind", "duplicate_name",
    "render", "render_markdown",
]
