"""
AST (Abstract Syntax Tree) node definitions for JSON Schema files.

These nodes represent the parsed structure of one schema file before
its references are bound to local or externally known types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SchemaNode:
    """Base class for all AST nodes."""

    # Location in the schema document (for error messages)
    source_path: str = ""

    # Raw schema metadata (x-* extensions, etc.)
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class PrimitiveNode(SchemaNode):
    """Represents a primitive type (string, integer, number, boolean, null, object)."""

    type_name: str = ""


@dataclass
class ConstNode(SchemaNode):
    """Represents a const value."""

    value: Any = None
    inferred_type: str = ""


@dataclass
class EnumNode(SchemaNode):
    """Represents an enum type."""

    values: list[Any] = field(default_factory=list)
    inferred_type: str = ""


@dataclass
class RefNode(SchemaNode):
    """Represents a $ref (unresolved reference)."""

    ref_path: str = ""  # e.g., "#/$defs/Address" or "common.json#/$defs/Address"

    # Optional type name override from x-ref-class-name
    class_name_override: str | None = None


@dataclass
class ArrayNode(SchemaNode):
    """Represents an array type."""

    items: SchemaNode | list[SchemaNode] | None = None  # Single type or tuple types


@dataclass
class PropertyDef(SchemaNode):
    """Represents a property in an object."""

    name: str = ""
    type_node: SchemaNode | None = None
    is_required: bool = False


@dataclass
class ObjectNode(SchemaNode):
    """Represents an object type with properties."""

    properties: list[PropertyDef] = field(default_factory=list)
    required: list[str] = field(default_factory=list)


@dataclass
class UnionNode(SchemaNode):
    """Represents a oneOf or anyOf union type."""

    variants: list[SchemaNode] = field(default_factory=list)
    union_type: str = "oneOf"  # "oneOf", "anyOf" or "typeArray"


@dataclass
class AllOfNode(SchemaNode):
    """Represents inheritance via allOf."""

    base_ref: RefNode | None = None
    extension: SchemaNode | None = None


@dataclass
class DefinitionNode(SchemaNode):
    """A named type declared by a schema file.

    This is the value stored in the type registry for each type name.
    """

    name: str = ""
    body: SchemaNode | None = None
    source_file: str = ""

    # $ref nodes found in the body (nested definitions excluded)
    ref_nodes: list[RefNode] = field(default_factory=list)

    # Type names the refs point to, filled in by the ReferenceResolver
    references: list[str] = field(default_factory=list)


@dataclass
class SchemaAST:
    """Root of one parsed schema file."""

    source_file: str = ""
    root_name: str = ""
    root_node: SchemaNode | None = None  # Top-level schema if it has properties
    definitions: list[DefinitionNode] = field(default_factory=list)

    # Every $ref found in the file, in document order
    references: list[RefNode] = field(default_factory=list)

    # Raw schema for reference
    raw_schema: dict[str, Any] = field(default_factory=dict)
