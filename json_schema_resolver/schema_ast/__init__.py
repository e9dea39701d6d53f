"""
Schema AST (Abstract Syntax Tree) module.

Contains the AST node definitions and parser for JSON Schema files.
"""

from __future__ import annotations

from .nodes import (
    AllOfNode,
    ArrayNode,
    ConstNode,
    DefinitionNode,
    EnumNode,
    ObjectNode,
    PrimitiveNode,
    PropertyDef,
    RefNode,
    SchemaAST,
    SchemaNode,
    UnionNode,
)
from .parser import SchemaParser

__all__ = [
    "SchemaNode",
    "ObjectNode",
    "ArrayNode",
    "RefNode",
    "PrimitiveNode",
    "PropertyDef",
    "EnumNode",
    "UnionNode",
    "AllOfNode",
    "ConstNode",
    "DefinitionNode",
    "SchemaAST",
    "SchemaParser",
]
