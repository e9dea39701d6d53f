"""
JSON Schema parser that builds an AST for one schema file.

Parses definitions and collects every $ref without binding any of
them; binding happens in the ReferenceResolver against the types
known at the time of the attempt.
"""

from __future__ import annotations

from typing import Any

from ..exceptions import SchemaSyntaxError
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


class SchemaParser:
    """Parses a JSON Schema document into an AST."""

    # Keys holding named type definitions
    DEFINITION_KEYS = ("$defs", "definitions")

    # Keys mapping arbitrary names to subschemas
    SCHEMA_MAP_KEYS = ("properties", "patternProperties", "dependentSchemas")

    # Keys holding instance data rather than subschemas
    VALUE_KEYS = ("const", "enum", "default", "examples")

    def __init__(self):
        self._ast: SchemaAST | None = None
        self._current_refs: list[RefNode] = []

    def parse(self, schema: dict[str, Any], source_file: str = "") -> SchemaAST:
        """
        Parse a JSON Schema into an AST.

        Args:
            schema: The JSON Schema dictionary
            source_file: Path of the file the schema was read from

        Returns:
            SchemaAST with parsed definitions, optional root node and all references
        """
        self._ast = SchemaAST(
            source_file=source_file,
            root_name=schema.get("title", "") if isinstance(schema.get("title"), str) else "",
            raw_schema=schema,
        )

        self._parse_definitions(schema, "#")

        root_refs: list[RefNode] = []
        self._current_refs = root_refs
        self._collect_refs(schema, "#")

        # Parse root node if it has properties
        if "properties" in schema:
            self._ast.root_node = self._parse_schema_node(schema, "#")
            if self._ast.root_name:
                # Declared first so a $defs entry of the same name replaces it
                self._ast.definitions.insert(
                    0,
                    DefinitionNode(
                        name=self._ast.root_name,
                        body=self._ast.root_node,
                        source_file=source_file,
                        ref_nodes=root_refs,
                        source_path="#",
                    ),
                )

        ast = self._ast
        self._ast = None
        return ast

    def _parse_definitions(self, schema: dict[str, Any], path: str) -> None:
        """Parse every $defs/definitions entry of schema, recursing into their bodies."""
        for key in self.DEFINITION_KEYS:
            definitions = schema.get(key)
            if definitions is None:
                continue
            if not isinstance(definitions, dict):
                raise SchemaSyntaxError(f"{path}/{key} must be an object")

            for name, def_schema in definitions.items():
                # Skip comment fields (strings) and _comment prefixed keys
                if isinstance(def_schema, str) or name.startswith("_comment"):
                    continue
                def_path = f"{path}/{key}/{name}"
                if not isinstance(def_schema, dict):
                    raise SchemaSyntaxError(f"Definition at {def_path} must be an object")

                def_refs: list[RefNode] = []
                self._current_refs = def_refs
                self._collect_refs(def_schema, def_path)
                body = self._parse_schema_node(def_schema, def_path)
                self._ast.definitions.append(
                    DefinitionNode(
                        name=name,
                        body=body,
                        source_file=self._ast.source_file,
                        ref_nodes=def_refs,
                        source_path=def_path,
                    )
                )

                self._parse_definitions(def_schema, def_path)

    def _collect_refs(self, schema: Any, path: str) -> None:
        """
        Register every $ref found anywhere under schema.

        Nested $defs/definitions are skipped; _parse_definitions collects
        their refs for their own DefinitionNode.

        Args:
            schema: Schema value (object, array or scalar)
            path: Current path in schema (for error messages)
        """
        if isinstance(schema, list):
            for i, item in enumerate(schema):
                self._collect_refs(item, f"{path}/{i}")
            return
        if not isinstance(schema, dict):
            return

        for key, value in schema.items():
            if key == "$ref":
                self._register_ref(self._parse_ref_node(schema, path, self._extract_metadata(schema)))
            elif key in self.DEFINITION_KEYS or key in self.VALUE_KEYS or key.startswith("x-"):
                continue
            elif key in self.SCHEMA_MAP_KEYS and isinstance(value, dict):
                for name, sub_schema in value.items():
                    self._collect_refs(sub_schema, f"{path}/{key}/{name}")
            else:
                self._collect_refs(value, f"{path}/{key}")

    def _parse_schema_node(self, schema: Any, path: str) -> SchemaNode:
        """
        Parse a schema node recursively.

        Args:
            schema: The schema dictionary
            path: Current path in schema (for error messages)

        Returns:
            Appropriate SchemaNode subclass
        """
        if isinstance(schema, bool):
            # true/false schemas accept anything/nothing
            return PrimitiveNode(type_name="object", source_path=path)
        if not isinstance(schema, dict):
            raise SchemaSyntaxError(f"Schema at {path} must be an object, got {type(schema).__name__}")

        metadata = self._extract_metadata(schema)

        if "$ref" in schema:
            return self._parse_ref_node(schema, path, metadata)

        if "const" in schema:
            return ConstNode(
                value=schema["const"],
                inferred_type=self._infer_type(schema["const"]),
                source_path=path,
                metadata=metadata,
            )

        if "oneOf" in schema or "anyOf" in schema:
            return self._parse_union_node(schema, path, metadata)

        if "allOf" in schema:
            return self._parse_allof_node(schema, path, metadata)

        if "type" in schema:
            return self._parse_type_node(schema, path, metadata)

        if "enum" in schema:
            values = schema["enum"]
            return EnumNode(
                values=values,
                inferred_type=self._infer_type(values[0]) if values else "string",
                source_path=path,
                metadata=metadata,
            )

        if "properties" in schema:
            return self._parse_object_node(schema, path, metadata)

        # Fallback: treat as generic object
        return PrimitiveNode(
            type_name="object",
            source_path=path,
            metadata=metadata,
        )

    def _extract_metadata(self, schema: dict[str, Any]) -> dict[str, Any]:
        """Extract x-* extension metadata from schema."""
        return {key: value for key, value in schema.items() if key.startswith("x-")}

    def _parse_ref_node(self, schema: dict[str, Any], path: str, metadata: dict[str, Any]) -> RefNode:
        """Parse a $ref node."""
        ref_path = schema["$ref"]
        if not isinstance(ref_path, str):
            raise SchemaSyntaxError(f"$ref at {path} must be a string")

        return RefNode(
            ref_path=ref_path,
            class_name_override=schema.get("x-ref-class-name"),
            source_path=path,
            metadata=metadata,
        )

    def _register_ref(self, node: RefNode) -> None:
        self._current_refs.append(node)
        self._ast.references.append(node)

    def _parse_union_node(self, schema: dict[str, Any], path: str, metadata: dict[str, Any]) -> UnionNode:
        """Parse a oneOf or anyOf union node."""
        union_type = "oneOf" if "oneOf" in schema else "anyOf"
        variants_schema = schema[union_type]
        if not isinstance(variants_schema, list):
            raise SchemaSyntaxError(f"{path}/{union_type} must be an array")

        variants = [
            self._parse_schema_node(variant, f"{path}/{union_type}/{i}") for i, variant in enumerate(variants_schema)
        ]

        return UnionNode(
            variants=variants,
            union_type=union_type,
            source_path=path,
            metadata=metadata,
        )

    def _parse_allof_node(self, schema: dict[str, Any], path: str, metadata: dict[str, Any]) -> AllOfNode:
        """Parse an allOf node (inheritance)."""
        allof = schema["allOf"]
        if not isinstance(allof, list):
            raise SchemaSyntaxError(f"{path}/allOf must be an array")

        # First element should be a $ref to base class
        base_ref = None
        extension = None

        if len(allof) >= 1 and isinstance(allof[0], dict) and "$ref" in allof[0]:
            base_ref = self._parse_ref_node(allof[0], f"{path}/allOf/0", {})
        elif len(allof) >= 1:
            extension = self._parse_schema_node(allof[0], f"{path}/allOf/0")

        for i, part in enumerate(allof[1:], start=1):
            node = self._parse_schema_node(part, f"{path}/allOf/{i}")
            if extension is None:
                extension = node

        return AllOfNode(
            base_ref=base_ref,
            extension=extension,
            source_path=path,
            metadata=metadata,
        )

    def _parse_type_node(self, schema: dict[str, Any], path: str, metadata: dict[str, Any]) -> SchemaNode:
        """Parse a type-based node."""
        type_value = schema["type"]

        # Handle array of types (union)
        if isinstance(type_value, list):
            # Single-element type array is not a union
            if len(type_value) == 1:
                type_value = type_value[0]
            else:
                return self._parse_type_union(schema, type_value, path, metadata)

        if type_value == "array":
            return self._parse_array_node(schema, path, metadata)

        if type_value == "object":
            return self._parse_object_node(schema, path, metadata)

        return PrimitiveNode(
            type_name=type_value,
            source_path=path,
            metadata=metadata,
        )

    def _parse_type_union(
        self,
        schema: dict[str, Any],
        types: list[str],
        path: str,
        metadata: dict[str, Any],
    ) -> UnionNode:
        """Parse a union of types (e.g., ["string", "null"])."""
        variants = []
        for t in types:
            variant_schema = {k: v for k, v in schema.items() if k != "type"}
            variant_schema["type"] = t
            variants.append(self._parse_type_node(variant_schema, f"{path}/type/{t}", {}))

        return UnionNode(
            variants=variants,
            union_type="typeArray",  # Distinguish from explicit oneOf/anyOf
            source_path=path,
            metadata=metadata,
        )

    def _parse_array_node(self, schema: dict[str, Any], path: str, metadata: dict[str, Any]) -> ArrayNode:
        """Parse an array type node."""
        items_schema = schema.get("items")
        items = None

        if items_schema is not None:
            if isinstance(items_schema, list):
                # Tuple type
                items = [self._parse_schema_node(item, f"{path}/items/{i}") for i, item in enumerate(items_schema)]
            else:
                items = self._parse_schema_node(items_schema, f"{path}/items")

        return ArrayNode(
            items=items,
            source_path=path,
            metadata=metadata,
        )

    def _parse_object_node(self, schema: dict[str, Any], path: str, metadata: dict[str, Any]) -> ObjectNode:
        """Parse an object type node."""
        properties = []
        required_fields = schema.get("required", [])
        properties_schema = schema.get("properties", {})
        if not isinstance(properties_schema, dict):
            raise SchemaSyntaxError(f"{path}/properties must be an object")

        for prop_name, prop_schema in properties_schema.items():
            prop_path = f"{path}/properties/{prop_name}"
            properties.append(
                PropertyDef(
                    name=prop_name,
                    type_node=self._parse_schema_node(prop_schema, prop_path),
                    is_required=prop_name in required_fields,
                    source_path=prop_path,
                )
            )

        additional = schema.get("additionalProperties")
        if isinstance(additional, dict):
            # Map value types can reference other types too
            metadata["additionalProperties"] = self._parse_schema_node(additional, f"{path}/additionalProperties")

        return ObjectNode(
            properties=properties,
            required=required_fields,
            source_path=path,
            metadata=metadata,
        )

    def _infer_type(self, value: Any) -> str:
        """Infer the JSON Schema type from a Python value."""
        if isinstance(value, bool):
            return "boolean"
        if isinstance(value, int):
            return "integer"
        if isinstance(value, float):
            return "number"
        if isinstance(value, str):
            return "string"
        if value is None:
            return "null"
        return "object"
