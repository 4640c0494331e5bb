"""
Summary: Concrete minifier strategies and observers.
Why: Keep adapter exports together for easy discovery.
"""

from .logging_observer import LoggingObserver
from .node_runtime import NodeRuntimeCache, RuntimeInitializationError
from .script_minifier import ScriptMinifier
from .style_markup import CssMinifier, HtmlMinifier

__all__ = [
    "CssMinifier",
    "HtmlMinifier",
    "LoggingObserver",
    "NodeRuntimeCache",
    "RuntimeInitializationError",
    "ScriptMinifier",
]
