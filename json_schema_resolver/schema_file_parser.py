"""
Parser for a single schema file against a set of known types.

This is the collaborator the resolution engine calls once per attempt:
it either returns the types the file defines or raises a
SchemaResolutionError describing why the attempt failed.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .analyzer import ReferenceResolver
from .loader import load_schema
from .schema_ast import DefinitionNode, SchemaParser

logger = logging.getLogger(__name__)


class SchemaFileParser:
    """Parses JSON Schema files and binds their references."""

    def __init__(self, encoding: str = "utf-8"):
        """
        Initialize the parser.

        Args:
            encoding: Text encoding of the schema files
        """
        self.encoding = encoding

    def parse(self, source_file: Path, known_types: Mapping[str, Any]) -> dict[str, DefinitionNode]:
        """
        Parse a schema file.

        Args:
            source_file: The schema file to parse
            known_types: Type name -> definition bindings the file may assume

        Returns:
            Type name -> DefinitionNode for every type the file defines

        Raises:
            SchemaSyntaxError: If the file cannot be read or is malformed
            UnresolvedReferenceError: If a $ref names an unknown type
        """
        schema = load_schema(source_file, self.encoding)
        ast = SchemaParser().parse(schema, source_file=str(source_file))
        types = ReferenceResolver(ast, known_types).resolve_all()
        logger.debug("Parsed %s: %d type(s), %d reference(s)", source_file, len(types), len(ast.references))
        return types
