"""SDL summarization: operations and type definitions from schema text."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from graphql import build_client_schema, print_schema

from . import scanner
from .models import (
    RESERVED_TYPE_NAMES,
    Operation,
    OperationKind,
    SchemaDocument,
    TypeDefinition,
    TypeKind,
)

logger = logging.getLogger(__name__)

ROOT_OPERATION_TYPES = (
    ("Query", OperationKind.QUERY),
    ("Mutation", OperationKind.MUTATION),
)


def summarize(schema_text) -> SchemaDocument:
    """
    Summarize a GraphQL SDL document.

    Never raises: text that cannot be understood is left out of the result,
    and anything other than a non-empty string yields an empty document.

    Args:
        schema_text: Raw SDL text

    Returns:
        SchemaDocument with Query operations, then Mutation operations, then
        every other definition in source order
    """
    if not isinstance(schema_text, str) or not schema_text:
        return SchemaDocument()

    operations: list[Operation] = []
    for root_name, kind in ROOT_OPERATION_TYPES:
        operations.extend(extract_operations(schema_text, root_name, kind))

    types = extract_type_definitions(schema_text)
    logger.debug("Summarized schema: %d operations, %d types", len(operations), len(types))
    return SchemaDocument(operations=operations, types=types)


def extract_operations(source_text, root_type_name: str, operation_kind) -> list[Operation]:
    """
    Extract the fields of one root type block as operations.

    Only the first block opened by a "type <root_type_name>" header is read;
    scanning stops once its braces balance.

    Args:
        source_text: Raw SDL text
        root_type_name: Root type to read, e.g. "Query"
        operation_kind: OperationKind (or its string value) stamped on results

    Returns:
        Operations in source order
    """
    if not isinstance(source_text, str) or not source_text:
        return []

    kind = OperationKind(operation_kind)
    operations: list[Operation] = []
    descriptions = scanner.DescriptionBuffer()
    block = scanner.BlockScanner(closes=lambda line, depth: depth == 0 and "}" in line)

    for line in source_text.split("\n"):
        trimmed = line.strip()

        if not trimmed:
            descriptions.blank()
            continue

        if not block.is_open:
            if not scanner.is_root_header(trimmed, root_type_name):
                continue
            descriptions.clear()
            closed = block.open(line)
            body = scanner.inline_body(trimmed)
            if body:
                op = _field_operation(body, trimmed, kind, descriptions)
                if op:
                    operations.append(op)
            if closed:
                break
            continue

        closed = block.feed(line)
        if block.depth > 0:
            op = _scan_body_line(trimmed, kind, descriptions)
            if op:
                operations.append(op)
        if closed:
            break

    logger.debug("Extracted %d %s operations from type %s", len(operations), kind.value, root_type_name)
    return operations


def _scan_body_line(trimmed: str, kind: OperationKind, descriptions: scanner.DescriptionBuffer) -> Optional[Operation]:
    if descriptions.accepts(trimmed):
        descriptions.add(trimmed)
        return None

    descriptions.settle()
    op = _field_operation(trimmed, trimmed, kind, descriptions)
    if op is None and descriptions.pending:
        # Unrelated content between a description and the next field
        descriptions.clear()
    return op


def _field_operation(
    text: str, content: str, kind: OperationKind, descriptions: scanner.DescriptionBuffer
) -> Optional[Operation]:
    match = scanner.match_field(text)
    if match is None:
        return None

    parameters = scanner.parse_parameters(match.args)
    return Operation(
        name=match.name,
        kind=kind,
        description=descriptions.take(),
        parameters=parameters or None,
        return_type=scanner.clean_return_type(match.returns),
        content=content,
    )


@dataclass
class _OpenDefinition:
    kind: TypeKind
    name: str
    description: Optional[str]
    lines: list[str] = field(default_factory=list)
    awaiting_members: bool = False
    in_block_string: bool = False

    def finish(self) -> TypeDefinition:
        return TypeDefinition(
            name=self.name,
            kind=self.kind,
            description=self.description,
            content="\n".join(self.lines),
        )


def extract_type_definitions(source_text) -> list[TypeDefinition]:
    """
    Extract every non-root definition with its raw source block.

    A definition runs from its header line to the line where its braces
    balance again; scalar and union definitions end on their header line.
    A union header ending in "=" or "|" also takes the "|" member lines that
    follow it. Query, Mutation and Subscription headers end any open
    definition and are otherwise ignored. Lines inside a block string in a
    body are content, never headers.

    Args:
        source_text: Raw SDL text

    Returns:
        TypeDefinitions in source order
    """
    if not isinstance(source_text, str) or not source_text:
        return []

    definitions: list[TypeDefinition] = []
    descriptions = scanner.DescriptionBuffer()
    current: Optional[_OpenDefinition] = None

    def closes(line: str, depth: int) -> bool:
        return depth == 0 and ("}" in line or not current.kind.has_body)

    block = scanner.BlockScanner(closes=closes)

    def finalize() -> None:
        nonlocal current
        definitions.append(current.finish())
        current = None
        block.reset()

    for line in source_text.split("\n"):
        trimmed = line.strip()
        if not trimmed:
            continue

        if current is not None and current.awaiting_members:
            if trimmed.startswith("|"):
                current.lines.append(line)
                continue
            finalize()

        if current is None and descriptions.accepts(trimmed):
            descriptions.add(trimmed)
            continue

        # Block string inside a body: content only, never a header
        if current is not None and (current.in_block_string or scanner.TRIPLE_QUOTE in trimmed):
            if scanner.toggles_block_string(trimmed):
                current.in_block_string = not current.in_block_string
            current.lines.append(line)
            if block.feed(line):
                finalize()
            continue

        if scanner.starts_with_header_keyword(trimmed):
            header = scanner.match_header(trimmed)
            if header is None:
                continue

            if header.name in RESERVED_TYPE_NAMES:
                if current is not None:
                    finalize()
                descriptions.clear()
                continue

            if current is not None:
                finalize()

            current = _OpenDefinition(
                kind=header.kind,
                name=header.name,
                description=descriptions.take(),
                lines=[line],
            )
            if block.open(line):
                if header.kind is TypeKind.UNION and trimmed.endswith(("=", "|")):
                    current.awaiting_members = True
                else:
                    finalize()
            continue

        if current is not None:
            current.lines.append(line)
            if block.feed(line):
                finalize()
            continue

        descriptions.clear()

    if current is not None:
        finalize()

    logger.debug("Extracted %d type definitions", len(definitions))
    return definitions


def sdl_from_introspection(schema_json: dict) -> str:
    """
    Render an introspection result as SDL text.

    Args:
        schema_json: Introspection result, either {"__schema": {...}} or {"data": {"__schema": {...}}}

    Returns:
        SDL text as printed by graphql-core
    """
    # Handle both formats
    if "__schema" in schema_json:
        data = schema_json
    elif "data" in schema_json and "__schema" in schema_json["data"]:
        data = schema_json["data"]
    else:
        data = schema_json

    return print_schema(build_client_schema(data))
