"""File-backed knowledge store.

The store owns a single JSON record on disk and exposes a read-validate-write
contract over it:

- ``read`` loads the record and validates it against :class:`KnowledgeDocument`.
- ``write`` validates a document and atomically replaces the record.
- ``update`` is the read-modify-write composition used to change one concept.

There is no locking. ``update`` is not atomic with respect to another process
writing the same file; the last write wins and lost updates are not detected.
Within one event loop the three steps run without a suspension point, so two
invocations dispatched by this process never interleave their store access.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from ..errors import CorruptState, InvalidDocument, StoreUnavailable
from .models import KnowledgeDocument, render_document

logger = logging.getLogger(__name__)


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(p) for p in err.get("loc", ()))
    return f"{loc}: {err.get('msg')}" if loc else str(err.get("msg"))


class KnowledgeStore:
    """
    Read/validate/write access to one knowledge document on disk.

    Args:
        path: Location of the backing JSON file.
        seed_path: Optional read-only seed used while ``path`` does not exist yet.
            The first ``write`` materializes the record at ``path``.
    """

    def __init__(self, path: Union[str, Path], *, seed_path: Optional[Union[str, Path]] = None) -> None:
        self._path = Path(path)
        self._seed_path = Path(seed_path) if seed_path is not None else None

    @property
    def path(self) -> Path:
        return self._path

    def _source(self) -> Path:
        if self._path.exists() or self._seed_path is None:
            return self._path
        logger.debug("Knowledge file %s missing; reading seed %s", self._path, self._seed_path)
        return self._seed_path

    def read(self) -> KnowledgeDocument:
        """
        Load and validate the current document.

        Returns:
            The validated document.

        Raises:
            StoreUnavailable: If the backing file (and seed) cannot be read.
            CorruptState: If the content is not UTF-8 JSON or fails schema validation.
        """
        source = self._source()
        try:
            raw = source.read_text(encoding="utf-8")
        except OSError as exc:
            logger.error("Knowledge store unavailable at %s: %s", source, exc)
            raise StoreUnavailable(f"Cannot read knowledge store at '{source}': {exc}") from exc
        except UnicodeDecodeError as exc:
            logger.error("Knowledge store at %s is not valid UTF-8: %s", source, exc)
            raise CorruptState(f"Knowledge store at '{source}' is not valid UTF-8: {exc}") from exc

        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, RecursionError) as exc:
            logger.error("Knowledge store at %s is not valid JSON: %s", source, exc)
            raise CorruptState(f"Knowledge store at '{source}' is not valid JSON: {exc}") from exc

        try:
            return KnowledgeDocument.model_validate(data)
        except ValidationError as exc:
            logger.error("Knowledge store at %s failed validation: %s", source, exc)
            raise CorruptState(f"Knowledge store at '{source}' failed validation: {_first_error(exc)}") from exc

    def write(self, doc: Union[KnowledgeDocument, Mapping[str, Any]]) -> KnowledgeDocument:
        """
        Validate ``doc`` and replace the stored record with it.

        The record is written to a temporary file in the same directory and
        moved into place with ``os.replace``, so readers see either the old or
        the new document, never a partial one.

        Args:
            doc: A document instance or a mapping in the on-disk shape.

        Returns:
            The validated document that was written.

        Raises:
            InvalidDocument: If validation fails. Storage is not touched.
            StoreUnavailable: If the file cannot be written.
        """
        payload = doc.model_dump(by_alias=True) if isinstance(doc, KnowledgeDocument) else dict(doc)
        try:
            validated = KnowledgeDocument.model_validate(payload)
        except ValidationError as exc:
            raise InvalidDocument(f"Refusing to write invalid knowledge document: {_first_error(exc)}") from exc

        text = render_document(validated)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(text)
                    fh.flush()
                    os.fsync(fh.fileno())
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            logger.error("Failed to write knowledge store at %s: %s", self._path, exc)
            raise StoreUnavailable(f"Cannot write knowledge store at '{self._path}': {exc}") from exc

        logger.debug("Wrote knowledge store %s (%d concepts)", self._path, len(validated.known_concepts))
        return validated

    def update(self, concept: str, known: bool) -> KnowledgeDocument:
        """
        Set ``known_concepts[concept] = known`` via read-modify-write.

        Returns:
            The document as written.
        """
        current = self.read()
        updated = self.write(current.with_concept(concept, known))
        logger.info("Concept %r marked known=%s for owner %s", concept, known, updated.owner_id)
        return updated
