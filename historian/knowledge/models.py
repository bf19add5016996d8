"""Pydantic schema for the persisted knowledge document."""

from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr


class BaseSchema(BaseModel):
    """
    Base Pydantic model for persisted schemas.

    - ``populate_by_name=True``: Allow initialization by alias or field name.
    - ``extra="forbid"``: Any top-level field other than the declared ones makes the record invalid.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
    )


class KnowledgeDocument(BaseSchema):
    """
    Record of which concepts an owner is known to understand.

    The on-disk shape is ``{"ownerId": str, "knownConcepts": {str: bool}}``.
    Concept names are compared by exact string equality.
    """

    owner_id: StrictStr = Field(..., alias="ownerId", min_length=1, description="Opaque owner identifier")
    known_concepts: Dict[StrictStr, StrictBool] = Field(
        ..., alias="knownConcepts", description="Concept name -> known flag"
    )

    def with_concept(self, concept: str, known: bool) -> "KnowledgeDocument":
        """Return a copy with ``concept`` set to ``known`` (inserted or overwritten)."""
        concepts = dict(self.known_concepts)
        concepts[concept] = known
        return self.model_copy(update={"known_concepts": concepts})


def render_document(doc: KnowledgeDocument) -> str:
    """Serialize a document to its canonical JSON text.

    Both the store and every capability that returns the document use this
    function, so the same state always renders to the same bytes.
    """
    return doc.model_dump_json(by_alias=True, indent=2)
