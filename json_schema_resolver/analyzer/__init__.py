"""
Analyzer module.

Contains reference resolution for parsed schema files.
"""

from __future__ import annotations

from .reference_resolver import ReferenceResolver, ResolvedRef

__all__ = [
    "ReferenceResolver",
    "ResolvedRef",
]
