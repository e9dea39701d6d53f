"""
Outcome of a resolution run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..exceptions import UnresolvableFilesError
from .file_state import FileState
from .type_state import TypeState


@dataclass
class ResolutionResult:
    """Final registry and file partition of a run.

    Attributes:
        types: Type name -> TypeState for every resolved type
        resolved_files: Files that parsed successfully, in order of success
        failed_files: Files that never resolved, each with its last error
        attempts: Number of parse attempts made
    """

    types: dict[str, TypeState] = field(default_factory=dict)
    resolved_files: list[FileState] = field(default_factory=list)
    failed_files: list[FileState] = field(default_factory=list)
    attempts: int = 0

    @property
    def succeeded(self) -> bool:
        return not self.failed_files

    def definitions(self) -> dict[str, Any]:
        """Type name -> definition."""
        return {name: type_state.definition for name, type_state in self.types.items()}

    def raise_for_failures(self) -> None:
        """Raise UnresolvableFilesError if any file failed."""
        if self.failed_files:
            raise UnresolvableFilesError(self.failed_files)
