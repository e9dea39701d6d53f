"""
Configuration for schema dependency resolution.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ResolverConfig:
    """Configuration options for resolving a set of schema files."""

    # Glob pattern used when a directory is given as input
    pattern: str = "*.json"

    # Whether directories are searched recursively
    recursive: bool = True

    # Encoding used to read schema files
    encoding: str = "utf-8"

    # Raise UnresolvableFilesError at the end of a run with failures
    fail_on_unresolved: bool = False

    @staticmethod
    def from_dict(d: dict) -> ResolverConfig:
        """Create a config from a dictionary, ignoring unknown keys."""
        config = ResolverConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "pattern": self.pattern,
            "recursive": self.recursive,
            "encoding": self.encoding,
            "fail_on_unresolved": self.fail_on_unresolved,
        }
