"""Application services composing the minification feature."""

from .minify_service import MinifyBundlesService, default_strategies

__all__ = ["MinifyBundlesService", "default_strategies"]
