"""GraphQL SDL summarizer: operations and type definitions for documentation."""

from .models import (
    Operation,
    OperationKind,
    Parameter,
    SchemaDocument,
    TypeDefinition,
    TypeKind,
)
from .parser import extract_operations, extract_type_definitions, summarize

__version__ = "0.1.0"

__all__ = [
    "Operation",
    "OperationKind",
    "Parameter",
    "SchemaDocument",
    "TypeDefinition",
    "TypeKind",
    "extract_operations",
    "extract_type_definitions",
    "summarize",
]
