"""
Summary: Domain value objects for minification outcomes and file naming.
Why: Keep pure data and naming rules free of I/O and adapters.
"""

from __future__ import annotations

from .file_names import get_min_file_name
from .results import MinificationError, MinificationResult

__all__ = ["MinificationError", "MinificationResult", "get_min_file_name"]
