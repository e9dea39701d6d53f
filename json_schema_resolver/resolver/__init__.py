"""
Resolution engine.

Resolves named types across schema files without a precomputed
dependency graph: files that fail are retried after any success,
until no further file can be resolved.
"""

from __future__ import annotations

from .dependency_resolver import DependencyResolver, SchemaParserProtocol
from .file_state import FileState
from .processing_state import ProcessingState
from .result import ResolutionResult
from .type_state import TypeState

__all__ = [
    "DependencyResolver",
    "FileState",
    "ProcessingState",
    "ResolutionResult",
    "SchemaParserProtocol",
    "TypeState",
]
