"""
State of one resolution run.

Files wait in a FIFO work queue. A file whose attempt fails moves to the
holding set; every successful attempt moves the whole holding set back to
the queue, since any new type may be the one a held file was missing.
The run is over when the queue is empty: whatever is still held at that
point can never be resolved.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from .file_state import FileState
from .type_state import TypeState


class ProcessingState:
    """Type registry, work queue and holding set for one run.

    Single use: construct per run with every input file.
    """

    def __init__(self, source_files: Iterable[Path | str | FileState], encoding: str = "utf-8"):
        """
        Initialize the state with every file queued in the given order.

        Args:
            source_files: Schema files, as paths or ready-made FileState records
            encoding: Text encoding used to scan files for duplicate names
        """
        self._type_states: dict[str, TypeState] = {}
        # dict keys keep insertion order and give set semantics
        self._delayed_files: dict[FileState, None] = {}
        self._files_to_process: deque[FileState] = deque(
            f if isinstance(f, FileState) else FileState(Path(f), encoding=encoding) for f in source_files
        )
        self.file_states: tuple[FileState, ...] = tuple(self._files_to_process)

    @property
    def type_states(self) -> Mapping[str, TypeState]:
        """Read-only view of the type registry."""
        return MappingProxyType(self._type_states)

    def resolved_types(self) -> dict[str, Any]:
        """Type name -> definition for every registered type."""
        return {name: type_state.definition for name, type_state in self._type_states.items()}

    def determine_usable_types(self, file_state: FileState) -> dict[str, Any]:
        """Bindings to parse file_state with, taken from the live registry."""
        return file_state.compute_usable_bindings(self._type_states)

    def commit_new_definitions(self, file_state: FileState, new_types: Mapping[str, Any]) -> None:
        """
        Record the outcome of a successful attempt.

        Creates or updates a registry entry per new type, clears the file's
        error and requeues every held file.

        Args:
            file_state: The file that was parsed
            new_types: Type name -> definition for the types the file defines
        """
        source_file = file_state.source_file
        for type_name, definition in new_types.items():
            type_state = self._type_states.get(type_name)
            if type_state is None:
                type_state = self._type_states[type_name] = TypeState(type_name)
            type_state.process_definition(source_file, definition)
        file_state.clear_error()
        self._requeue_delayed_files()

    def enqueue(self, file_state: FileState) -> None:
        self._files_to_process.append(file_state)

    def defer_to_holding_set(self, file_state: FileState) -> None:
        """Hold a file until the next success. Holding a held file is a no-op."""
        self._delayed_files[file_state] = None

    def _requeue_delayed_files(self) -> None:
        self._files_to_process.extend(self._delayed_files)
        self._delayed_files.clear()

    def next_pending(self) -> FileState | None:
        """Pop the file at the head of the queue, or None when the queue is empty."""
        if not self._files_to_process:
            return None
        return self._files_to_process.popleft()

    def has_pending_work(self) -> bool:
        """Whether the queue is non-empty. Held files alone are not pending work."""
        return bool(self._files_to_process)

    @property
    def held_files(self) -> list[FileState]:
        """Files currently in the holding set, in insertion order."""
        return list(self._delayed_files)

    @property
    def pending_files(self) -> list[FileState]:
        """Files currently in the work queue, head first."""
        return list(self._files_to_process)

    def failed_files(self) -> list[FileState]:
        """Files never resolved; read once has_pending_work() is False."""
        return list(self._delayed_files)
