"""Lookup table from provider type to board formatter."""

from __future__ import annotations

from collections.abc import Mapping

from train_board_proxy.adapters.formatters.cleanup_rules import DEFAULT_CLEANUP_RULES, CleanupRules
from train_board_proxy.adapters.formatters.html_passthrough import HtmlPassthroughFormatter
from train_board_proxy.adapters.formatters.search_form_fallback import (
    SearchFormFallbackFormatter,
)
from train_board_proxy.adapters.formatters.structured_feed import StructuredFeedFormatter
from train_board_proxy.adapters.formatters.unavailable import UnavailableBoardFormatter
from train_board_proxy.domain.contracts import BoardFormatterProtocol
from train_board_proxy.domain.models.station import ProviderType


def build_formatter_registry(
    db_fallback_url_template: str,
    rules: CleanupRules = DEFAULT_CLEANUP_RULES,
    refresh_seconds: int = 60,
) -> Mapping[ProviderType, BoardFormatterProtocol]:
    """One formatter per provider type."""
    passthrough = HtmlPassthroughFormatter(rules, refresh_seconds)
    registry: dict[ProviderType, BoardFormatterProtocol] = {
        ProviderType.SBB: StructuredFeedFormatter(refresh_seconds),
        ProviderType.DB: SearchFormFallbackFormatter(
            db_fallback_url_template, rules, refresh_seconds
        ),
        ProviderType.NS: passthrough,
        ProviderType.RFI: passthrough,
        ProviderType.NATIONAL_RAIL: passthrough,
        ProviderType.SNCF: passthrough,
        ProviderType.RENFE: UnavailableBoardFormatter(),
    }
    missing = set(ProviderType) - set(registry)
    if missing:
        raise ValueError(f"No formatter registered for {sorted(missing)}")
    return registry
