"""
Exceptions raised while resolving schema files.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .resolver.file_state import FileState


class SchemaResolutionError(Exception):
    """Base class for all resolution failures.

    The resolver treats any instance raised by a parser as a failed attempt:
    the file is set aside and retried after another file succeeds.
    """

    pass


class UnresolvedReferenceError(SchemaResolutionError):
    """Raised when a $ref names a type that is neither local nor known."""

    def __init__(self, type_name: str, source_path: str = "", ref_path: str = ""):
        self.type_name = type_name
        self.source_path = source_path
        self.ref_path = ref_path
        message = f"Undefined name: {type_name}"
        if source_path:
            message += f" (referenced at {source_path})"
        super().__init__(message)


class SchemaSyntaxError(SchemaResolutionError):
    """Raised when a schema file cannot be read or is not valid JSON Schema."""

    pass


class UnresolvableFilesError(SchemaResolutionError):
    """Raised after a run when some files could never be resolved.

    Attributes:
        failed_files: FileState records left in the holding set
    """

    def __init__(self, failed_files: Iterable[FileState]):
        self.failed_files = list(failed_files)
        lines = ["Could not compile schema definition files:"]
        for file_state in self.failed_files:
            lines.append(f"* {file_state.source_file}: {file_state.error}")
        super().__init__("\n".join(lines))
