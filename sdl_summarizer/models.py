"""Document model produced by the SDL summarizer."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class OperationKind(str, Enum):
    """Root block an operation was found in."""

    QUERY = "query"
    MUTATION = "mutation"


class TypeKind(str, Enum):
    """SDL keyword that opened a type definition."""

    TYPE = "type"
    INTERFACE = "interface"
    ENUM = "enum"
    SCALAR = "scalar"
    UNION = "union"
    INPUT = "input"

    @property
    def has_body(self) -> bool:
        """Whether definitions of this kind are closed by a brace."""
        return self not in (TypeKind.SCALAR, TypeKind.UNION)


# Root types never reported as type definitions
RESERVED_TYPE_NAMES = frozenset({"Query", "Mutation", "Subscription"})


@dataclass(frozen=True)
class Parameter:
    """Single argument of an operation field."""

    name: str
    type: str
    required: bool

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.type, "required": self.required}


@dataclass
class Operation:
    """Field declared on the Query or Mutation root type."""

    name: str
    kind: OperationKind
    return_type: str
    content: str
    description: Optional[str] = None
    parameters: Optional[list[Parameter]] = None

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize to a plain dict.

        Absent description and parameters are omitted rather than emitted as null.
        """
        data: dict[str, Any] = {"name": self.name, "kind": self.kind.value}
        if self.description is not None:
            data["description"] = self.description
        if self.parameters is not None:
            data["parameters"] = [p.to_dict() for p in self.parameters]
        data["returnType"] = self.return_type
        data["content"] = self.content
        return data


@dataclass
class TypeDefinition:
    """Any non-root SDL definition, with its raw source block."""

    name: str
    kind: TypeKind
    content: str
    description: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "kind": self.kind.value}
        if self.description is not None:
            data["description"] = self.description
        data["content"] = self.content
        return data


@dataclass
class SchemaDocument:
    """Operations and type definitions recovered from one schema text."""

    operations: list[Operation] = field(default_factory=list)
    types: list[TypeDefinition] = field(default_factory=list)

    @property
    def queries(self) -> list[Operation]:
        return [op for op in self.operations if op.kind is OperationKind.QUERY]

    @property
    def mutations(self) -> list[Operation]:
        return [op for op in self.operations if op.kind is OperationKind.MUTATION]

    def is_empty(self) -> bool:
        return not self.operations and not self.types

    def to_dict(self) -> dict[str, Any]:
        return {
            "operations": [op.to_dict() for op in self.operations],
            "types": [t.to_dict() for t in self.types],
        }
