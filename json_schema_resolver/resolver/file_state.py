"""
Processing record for one schema file.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..loader import find_duplicate_type_names
from .type_state import TypeState


@dataclass(eq=False)
class FileState:
    """A schema file taking part in a resolution run.

    Compared and hashed by identity; the engine creates exactly one per file.

    Attributes:
        source_file: Path of the schema file
        duplicate_type_names: Names the file declares more than once; scanned
            from the file when not given
        error: Failure of the most recent attempt, None after a success
    """

    source_file: Path
    duplicate_type_names: frozenset[str] | None = None
    error: Exception | None = field(default=None)
    encoding: str = field(default="utf-8", repr=False)

    def __post_init__(self):
        self.source_file = Path(self.source_file)
        if self.duplicate_type_names is None:
            self.duplicate_type_names = find_duplicate_type_names(self.source_file, self.encoding)
        else:
            self.duplicate_type_names = frozenset(self.duplicate_type_names)

    def compute_usable_bindings(self, type_states: Mapping[str, TypeState]) -> dict[str, Any]:
        """
        Select the registry bindings this file may be parsed with.

        Names the file itself declares more than once are left out, so the
        parser resolves them from the file's own content.

        Args:
            type_states: The live type registry

        Returns:
            Type name -> definition
        """
        return {
            name: type_state.definition
            for name, type_state in type_states.items()
            if name not in self.duplicate_type_names
        }

    @property
    def has_error(self) -> bool:
        return self.error is not None

    def clear_error(self) -> None:
        self.error = None

    def record_error(self, error: Exception) -> None:
        self.error = error
