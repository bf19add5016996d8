"""Input contracts for capabilities.

A contract is an explicit schema value: an ordered tuple of tagged field
descriptors. The registry checks raw input against it before any handler
runs, so a malformed call always fails with ``InvalidInput`` and never reaches
the handler.

Validation is delegated to a Pydantic model generated from the descriptors
with strict types (``"true"`` is not a boolean, ``1`` is not a string).
The same descriptors render the JSON Schema published to the transport layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, ValidationError, create_model

from ..errors import InvalidInput


class FieldType(str, Enum):
    """Value types a contract field can declare."""

    string = "string"
    boolean = "boolean"


_PYTHON_TYPES: Dict[FieldType, Any] = {
    FieldType.string: StrictStr,
    FieldType.boolean: StrictBool,
}


@dataclass(frozen=True)
class FieldSpec:
    """Descriptor for one input field.

    Attributes
    ----------
    name:
        Key expected in the raw input mapping.
    type:
        Declared value type.
    description:
        Human text published with the schema.
    required:
        Whether the key must be present.
    non_empty:
        For strings, reject ``""``.
    """

    name: str
    type: FieldType
    description: str = ""
    required: bool = True
    non_empty: bool = False


class _ContractBase(BaseModel):
    model_config = ConfigDict(extra="forbid")


@dataclass(frozen=True)
class InputContract:
    """Ordered set of field descriptors; empty for no-input capabilities."""

    fields: Tuple[FieldSpec, ...] = ()

    @classmethod
    def of(cls, *fields: FieldSpec) -> "InputContract":
        names = [f.name for f in fields]
        if len(set(names)) != len(names):
            raise ValueError(f"duplicate field names in contract: {names}")
        return cls(fields=tuple(fields))

    @property
    def is_empty(self) -> bool:
        return not self.fields

    @cached_property
    def _model(self) -> Type[BaseModel]:
        definitions: Dict[str, Any] = {}
        for spec in self.fields:
            annotation = _PYTHON_TYPES[spec.type]
            constraints: Dict[str, Any] = {"description": spec.description}
            if spec.non_empty and spec.type is FieldType.string:
                constraints["min_length"] = 1
            if spec.required:
                definitions[spec.name] = (annotation, Field(..., **constraints))
            else:
                definitions[spec.name] = (Optional[annotation], Field(default=None, **constraints))
        return create_model("ContractInput", __base__=_ContractBase, **definitions)

    def validate(self, capability: str, raw: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """
        Check ``raw`` against the contract.

        Args:
            capability: Capability name, used in error messages.
            raw: Raw input from the caller; ``None`` is treated as ``{}``.

        Returns:
            The validated input. Optional fields that were not supplied are omitted.

        Raises:
            InvalidInput: With the first offending field and the reason.
        """
        if raw is None:
            raw = {}
        if not isinstance(raw, Mapping):
            raise InvalidInput(capability, "", f"expected an object, got {type(raw).__name__}")
        try:
            parsed = self._model.model_validate(dict(raw))
        except ValidationError as exc:
            err = exc.errors()[0]
            field = ".".join(str(p) for p in err.get("loc", ()))
            raise InvalidInput(capability, field, str(err.get("msg"))) from exc
        return parsed.model_dump(exclude_unset=True)

    def to_json_schema(self) -> Dict[str, Any]:
        """Render the contract as a JSON Schema object for discovery."""
        properties: Dict[str, Any] = {}
        for spec in self.fields:
            prop: Dict[str, Any] = {"type": spec.type.value}
            if spec.description:
                prop["description"] = spec.description
            if spec.non_empty and spec.type is FieldType.string:
                prop["minLength"] = 1
            properties[spec.name] = prop
        schema: Dict[str, Any] = {"type": "object", "properties": properties}
        required = [spec.name for spec in self.fields if spec.required]
        if required:
            schema["required"] = required
        schema["additionalProperties"] = False
        return schema


NO_INPUT = InputContract()
