"""
Run-to-completion driver for resolving a set of schema files.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Protocol

from ..config import ResolverConfig
from ..exceptions import SchemaResolutionError
from .processing_state import ProcessingState
from .result import ResolutionResult

logger = logging.getLogger(__name__)


class SchemaParserProtocol(Protocol):
    """What the resolver needs from a schema parser."""

    def parse(self, source_file: Path, known_types: Mapping[str, Any]) -> Mapping[str, Any]:
        """Return the types source_file defines, or raise SchemaResolutionError."""
        ...


class DependencyResolver:
    """Resolves schema files in any order by retrying failed files after each success."""

    def __init__(self, parser: SchemaParserProtocol, config: ResolverConfig | None = None):
        """
        Initialize the resolver.

        Args:
            parser: Parser invoked once per attempt
            config: Resolver configuration
        """
        self.parser = parser
        self.config = config or ResolverConfig()

    def resolve(self, source_files: Iterable[Path | str]) -> ResolutionResult:
        """
        Resolve every file to a fixed point.

        Args:
            source_files: Schema files; duplicates are dropped, order is kept

        Returns:
            ResolutionResult with the final registry and file partition

        Raises:
            UnresolvableFilesError: If files failed and config.fail_on_unresolved is set
        """
        unique_files = list(dict.fromkeys(Path(f) for f in source_files))
        state = ProcessingState(unique_files, encoding=self.config.encoding)
        result = ResolutionResult()

        while state.has_pending_work():
            file_state = state.next_pending()
            known_types = state.determine_usable_types(file_state)
            result.attempts += 1
            logger.debug("Parsing %s with %d known type(s)", file_state.source_file, len(known_types))

            try:
                new_types = self.parser.parse(file_state.source_file, known_types)
            except SchemaResolutionError as e:
                logger.debug("Deferring %s: %s", file_state.source_file, e)
                file_state.record_error(e)
                state.defer_to_holding_set(file_state)
                continue

            state.commit_new_definitions(file_state, new_types)
            result.resolved_files.append(file_state)

        result.types = dict(state.type_states)
        result.failed_files = state.failed_files()

        logger.info(
            "Resolved %d of %d file(s), %d type(s), %d attempt(s)",
            len(result.resolved_files),
            len(state.file_states),
            len(result.types),
            result.attempts,
        )
        for file_state in result.failed_files:
            logger.warning("Could not resolve %s: %s", file_state.source_file, file_state.error)

        if self.config.fail_on_unresolved:
            result.raise_for_failures()
        return result
