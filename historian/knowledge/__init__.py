"""Persisted knowledge state.

- ``KnowledgeDocument``: validated schema of the record.
- ``KnowledgeStore``: read/write/update over the backing JSON file.
- ``render_document``: canonical JSON rendering shared by every reader.
"""

from .models import KnowledgeDocument, render_document
from .store import KnowledgeStore

__all__ = [
    "KnowledgeDocument",
    "KnowledgeStore",
    "render_document",
]
