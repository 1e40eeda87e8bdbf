"""Provider-specific board formatters."""

from train_board_proxy.adapters.formatters.cleanup_rules import (
    DEFAULT_CLEANUP_RULES,
    CleanupRules,
)
from train_board_proxy.adapters.formatters.html_passthrough import HtmlPassthroughFormatter
from train_board_proxy.adapters.formatters.registry import build_formatter_registry
from train_board_proxy.adapters.formatters.search_form_fallback import (
    SearchFormFallbackFormatter,
    looks_like_search_form,
)
from train_board_proxy.adapters.formatters.structured_feed import StructuredFeedFormatter
from train_board_proxy.adapters.formatters.unavailable import UnavailableBoardFormatter

__all__ = [
    "DEFAULT_CLEANUP_RULES",
    "CleanupRules",
    "HtmlPassthroughFormatter",
    "SearchFormFallbackFormatter",
    "StructuredFeedFormatter",
    "UnavailableBoardFormatter",
    "build_formatter_registry",
    "looks_like_search_form",
]
