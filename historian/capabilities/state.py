from __future__ import annotations

"""State capabilities over the knowledge store.

The same document is reachable two ways:

- by name, through the ``read_from_memory`` action,
- by URI, through the ``css_knowledge_memory`` resource.

Both render through :func:`render_document`, so they return identical bytes
for the same stored state. ``write_to_memory`` is the only action that
mutates the document.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict

from ..knowledge import KnowledgeStore, render_document
from .base import CapabilityResult
from .contract import FieldSpec, FieldType, InputContract

logger = logging.getLogger(__name__)

RESOURCE_NAME = "css_knowledge_memory"
RESOURCE_URI = f"memory://{RESOURCE_NAME}/"

WRITE_CONTRACT = InputContract.of(
    FieldSpec("concept", FieldType.string, "The CSS concept name (e.g., 'Flexbox')", non_empty=True),
    FieldSpec("known", FieldType.boolean, "Whether the user knows this concept (true/false)"),
)


@dataclass(frozen=True)
class ReadStateCapability:
    """
    Return the current knowledge document as JSON.

    Registered twice: as the ``read_from_memory`` action and as the
    ``css_knowledge_memory`` resource. Store failures propagate unchanged.
    """

    store: KnowledgeStore

    async def execute(self, args: Dict[str, Any]) -> CapabilityResult:  # noqa: ARG002
        doc = self.store.read()
        return CapabilityResult(text=render_document(doc), mime_type="application/json")


@dataclass(frozen=True)
class WriteStateCapability:
    """
    Record whether the user knows a concept.

    Args (validated by the registry against ``WRITE_CONTRACT``):
        concept (str): Non-empty concept name, stored verbatim.
        known (bool): New flag for the concept.

    Returns:
        CapabilityResult: Confirmation message naming the concept.
    """

    store: KnowledgeStore

    async def execute(self, args: Dict[str, Any]) -> CapabilityResult:
        concept: str = args["concept"]
        known: bool = args["known"]
        self.store.update(concept, known)
        return CapabilityResult(text=f"Memory updated successfully for concept: {concept}")

