"""JSON Schema Dependency Resolver

Resolves named types across a set of JSON Schema files into one type
registry, in any file order, without a precomputed dependency graph.
"""

__version__ = "1.0.1"

from .config import ResolverConfig
from .discovery import discover_schema_files
from .exceptions import (
    SchemaResolutionError,
    SchemaSyntaxError,
    UnresolvableFilesError,
    UnresolvedReferenceError,
)
from .resolver import (
    DependencyResolver,
    FileState,
    ProcessingState,
    ResolutionResult,
    TypeState,
)
from .schema_file_parser import SchemaFileParser

__all__ = [
    "DependencyResolver",
    "ProcessingState",
    "FileState",
    "TypeState",
    "ResolutionResult",
    "ResolverConfig",
    "SchemaFileParser",
    "discover_schema_files",
    "SchemaResolutionError",
    "SchemaSyntaxError",
    "UnresolvedReferenceError",
    "UnresolvableFilesError",
]
