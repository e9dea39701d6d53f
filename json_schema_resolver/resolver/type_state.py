"""
Registry entry for one named type.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class TypeState:
    """Latest known definition of a named type and the file that supplied it.

    Attributes:
        name: Type name, unique within the registry
        source_file: File that most recently defined the type
        definition: The parsed definition
    """

    name: str
    source_file: Path | None = None
    definition: Any = None

    def process_definition(self, source_file: Path, definition: Any) -> None:
        """Store a definition, replacing any previous one.

        Redefinition is allowed: the last successful parse wins.
        """
        if self.source_file is not None and self.source_file != source_file:
            logger.debug("Type %s from %s superseded by %s", self.name, self.source_file, source_file)
        self.source_file = source_file
        self.definition = definition
