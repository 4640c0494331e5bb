"""
Summary: Shared value types used across feature layers.
Why: Keep the bundle contract importable without pulling feature modules.
"""

from __future__ import annotations

from .bundle import Bundle

__all__ = ["Bundle"]
