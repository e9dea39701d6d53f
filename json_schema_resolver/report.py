"""
Rendering of resolution results.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

from .resolver import ResolutionResult

CURRENT_DIR = Path(__file__).parent

_jinja_env = jinja2.Environment(lstrip_blocks=True, trim_blocks=True)
_report_template = _jinja_env.from_string((CURRENT_DIR / "templates" / "report.txt.jinja2").read_text(encoding="utf-8"))


def result_to_dict(result: ResolutionResult) -> dict[str, Any]:
    """
    Convert a result to a JSON-serializable dictionary.

    Args:
        result: The resolution result

    Returns:
        Dict with types (name -> defining file), resolved_files, failed_files and attempts
    """
    return {
        "types": {name: str(type_state.source_file) for name, type_state in result.types.items()},
        "resolved_files": [str(f.source_file) for f in result.resolved_files],
        "failed_files": [{"file": str(f.source_file), "error": str(f.error)} for f in result.failed_files],
        "attempts": result.attempts,
    }


def render_text_report(result: ResolutionResult, show_types: bool = False) -> str:
    """
    Render a human readable summary of a result.

    Args:
        result: The resolution result
        show_types: Whether to list every type with its defining file

    Returns:
        The report text
    """
    return _report_template.render(show_types=show_types, **result_to_dict(result))
