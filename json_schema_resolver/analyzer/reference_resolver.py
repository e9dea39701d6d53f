"""
Reference resolver for $ref resolution.

Binds each $ref of a parsed file either to a definition in the same
file or to a type already known from previously resolved files.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any

from ..exceptions import UnresolvedReferenceError
from ..schema_ast.nodes import DefinitionNode, RefNode, SchemaAST


@dataclass
class ResolvedRef:
    """A resolved $ref."""

    target_name: str = ""  # Resolved type name
    target_node: Any = None  # Local DefinitionNode or known external definition
    is_external: bool = False  # Whether this is an external $ref
    external_path: str = ""  # External schema path (if external)


class ReferenceResolver:
    """Resolves $ref to actual definitions."""

    def __init__(self, ast: SchemaAST, known_types: Mapping[str, Any]):
        """
        Initialize the resolver.

        Args:
            ast: The parsed schema AST
            known_types: Type name -> definition bindings the file may assume
        """
        self.ast = ast
        self.known_types = known_types
        self._definition_cache: dict[str, DefinitionNode] = {}
        self._build_cache()

    def _build_cache(self) -> None:
        """Build a cache of definitions by name."""
        for def_node in self.ast.definitions:
            self._definition_cache[def_node.name] = def_node

    def resolve_all(self) -> dict[str, DefinitionNode]:
        """
        Resolve every reference in the file.

        Fills in ``references`` on each definition.

        Returns:
            Type name -> DefinitionNode for every type the file defines

        Raises:
            UnresolvedReferenceError: On the first reference that cannot be bound
        """
        for ref_node in self.ast.references:
            self.resolve(ref_node)

        for def_node in self._definition_cache.values():
            names = (self.resolve(ref).target_name for ref in def_node.ref_nodes)
            def_node.references = list(dict.fromkeys(name for name in names if name))

        return dict(self._definition_cache)

    def resolve(self, ref_node: RefNode) -> ResolvedRef:
        """
        Resolve a $ref node to its target.

        Args:
            ref_node: The RefNode to resolve

        Returns:
            ResolvedRef with target information
        """
        ref_path = ref_node.ref_path

        # Check for external $ref
        if not ref_path.startswith("#"):
            return self._resolve_external_ref(ref_node)

        # Local $ref
        return self._resolve_local_ref(ref_node)

    def _resolve_local_ref(self, ref_node: RefNode) -> ResolvedRef:
        """Resolve a local $ref (starts with #)."""
        ref_path = ref_node.ref_path

        # "#" refers to the document root
        if ref_path in ("#", "#/"):
            return ResolvedRef(target_name=self.ast.root_name, target_node=self.ast.root_node)

        # e.g., "#/$defs/MyClass" or "#/$defs/Outer/$defs/Inner"
        def_name = _definition_name(ref_path.split("/"))

        def_node = self._definition_cache.get(def_name)
        if def_node is None:
            raise UnresolvedReferenceError(def_name, ref_node.source_path, ref_path)

        return ResolvedRef(
            target_name=def_name,
            target_node=def_node,
            is_external=False,
        )

    def _resolve_external_ref(self, ref_node: RefNode) -> ResolvedRef:
        """Resolve an external $ref (doesn't start with #)."""
        ref_path = ref_node.ref_path

        # Parse: "common.json#/$defs/ClassName"
        if "#" in ref_path:
            path_part, fragment = ref_path.split("#", 1)
            class_name = _definition_name(fragment.split("/")) if fragment.strip("/") else _document_name(path_part)
        else:
            # Just a schema reference without fragment
            path_part = ref_path
            class_name = _document_name(ref_path)

        # Check for class name override
        if ref_node.class_name_override:
            class_name = ref_node.class_name_override

        # A file's own definition takes precedence over an outside binding
        if class_name in self._definition_cache:
            target = self._definition_cache[class_name]
        elif class_name in self.known_types:
            target = self.known_types[class_name]
        else:
            raise UnresolvedReferenceError(class_name, ref_node.source_path, ref_path)

        return ResolvedRef(
            target_name=class_name,
            target_node=target,
            is_external=True,
            external_path=path_part,
        )


def _definition_name(parts: list[str]) -> str:
    """Return the last segment following a $defs/definitions key."""
    parts = [p for p in parts if p]
    for i in range(len(parts) - 2, -1, -1):
        if parts[i] in ("$defs", "definitions"):
            return parts[i + 1]
    return parts[-1] if parts else ""


def _document_name(path: str) -> str:
    """Type name implied by a bare document reference (``common.json`` -> ``common``)."""
    name = PurePosixPath(path).name
    for suffix in (".schema.json", ".json"):
        if name.endswith(suffix):
            return name[: -len(suffix)]
    return name
