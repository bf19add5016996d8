"""Capability registry and builtin capabilities.

A *capability* is a named unit of server functionality exposed to the
remote client:

- guidance text (``css-tutor-guidance``),
- the knowledge document as a resource (``css_knowledge_memory``),
- actions (``read_from_memory``, ``write_to_memory`` and, when a provider
  credential is configured, ``get_latest_updates``).

This package exports:

- ``Capability``/``CapabilityKind``/``CapabilityResult``: registry entry and output models.
- ``InputContract``/``FieldSpec``/``FieldType``: explicit input schemas.
- ``CapabilityRegistry``: name -> capability table with validated dispatch.
- ``available_capabilities``/``build_registry``: startup assembly.
"""

from .base import Capability, CapabilityKind, CapabilityResult
from .builtin import available_capabilities, build_registry
from .contract import NO_INPUT, FieldSpec, FieldType, InputContract
from .registry import CapabilityRegistry

__all__ = [
    "Capability",
    "CapabilityKind",
    "CapabilityResult",
    "CapabilityRegistry",
    "FieldSpec",
    "FieldType",
    "InputContract",
    "NO_INPUT",
    "available_capabilities",
    "build_registry",
]
