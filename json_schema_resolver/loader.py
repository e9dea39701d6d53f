"""
Loading of schema files from disk.

Two views of a file are needed: the regular decoded document used for
parsing, and a pair-preserving view used to find type names that a file
declares more than once (JSON allows repeated keys, ``json.load`` keeps
only the last one).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from .exceptions import SchemaSyntaxError
from .schema_ast.parser import SchemaParser

logger = logging.getLogger(__name__)


class _Pairs(list):
    """A decoded JSON object kept as its raw (key, value) pairs."""


def load_schema(path: Path, encoding: str = "utf-8") -> dict[str, Any]:
    """
    Read and decode a schema file.

    Args:
        path: Schema file to read
        encoding: Text encoding of the file

    Returns:
        The decoded JSON object

    Raises:
        SchemaSyntaxError: If the file cannot be read, is not valid JSON,
            or its top-level value is not an object
    """
    try:
        with open(path, encoding=encoding) as f:
            document = json.load(f)
    except OSError as e:
        raise SchemaSyntaxError(f"Cannot read {path}: {e}") from e
    except ValueError as e:
        raise SchemaSyntaxError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(document, dict):
        raise SchemaSyntaxError(f"Top-level value of {path} must be an object, got {type(document).__name__}")
    return document


def find_duplicate_type_names(path: Path, encoding: str = "utf-8") -> frozenset[str]:
    """
    Find the type names a schema file declares more than once.

    A file that cannot be read or decoded has no duplicates; the parser
    reports its problem when the file is attempted.

    Args:
        path: Schema file to scan
        encoding: Text encoding of the file

    Returns:
        Names declared at least twice in the file
    """
    try:
        with open(path, encoding=encoding) as f:
            document = json.load(f, object_pairs_hook=_Pairs)
    except (OSError, ValueError) as e:
        logger.debug("Skipping duplicate scan of %s: %s", path, e)
        return frozenset()

    if not isinstance(document, _Pairs):
        return frozenset()

    seen: set[str] = set()
    duplicates: set[str] = set()
    for name in _declared_type_names(document):
        if name in seen:
            duplicates.add(name)
        seen.add(name)
    return frozenset(duplicates)


def _declared_type_names(document: _Pairs) -> Iterator[str]:
    """Yield every declared type name, repeats included."""
    title = None
    has_properties = False
    for key, value in document:
        if key == "title" and isinstance(value, str):
            title = value
        elif key == "properties":
            has_properties = True
    if title and has_properties:
        yield title

    yield from _definition_names(document)


def _definition_names(node: _Pairs) -> Iterator[str]:
    """Yield names from $defs/definitions blocks, recursing into their bodies."""
    for key, value in node:
        if key not in SchemaParser.DEFINITION_KEYS or not isinstance(value, _Pairs):
            continue
        for name, body in value:
            if not isinstance(body, _Pairs) or name.startswith("_comment"):
                continue
            yield name
            yield from _definition_names(body)
