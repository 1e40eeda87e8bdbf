"""Which parts of an upstream page are removed or hidden before re-serving."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace

from train_board_proxy.domain.models.station import ProviderType

REMOVED_TAGS: tuple[str, ...] = ("header", "footer", "nav")

# Substrings of class or id values marking cookie, consent and ad elements
ATTRIBUTE_PATTERNS: tuple[str, ...] = (
    "cookie",
    "consent",
    "gdpr",
    "privacy-banner",
    "advert",
    "ad-banner",
)

HIDDEN_SELECTORS: tuple[str, ...] = (
    "header",
    "footer",
    ".header",
    ".footer",
    ".navigation",
    ".nav",
    ".menu",
    ".cookie-consent",
    ".cookie-banner",
    ".cookie-notice",
    ".gdpr-banner",
    ".advertisement",
    ".ads",
    ".sidebar",
    ".breadcrumb",
    ".breadcrumbs",
    ".search-bar",
    ".login",
    ".sign-in",
    ".user-menu",
    "#header",
    "#footer",
    "#navigation",
    "#cookie-consent",
    "#cookie-banner",
    '[class*="cookie"]',
    '[id*="cookie"]',
    '[class*="gdpr"]',
    '[class*="privacy-banner"]',
    '[class*="consent"]',
)

PROVIDER_SELECTORS: dict[str, tuple[str, ...]] = {
    ProviderType.RFI: (".top-bar", ".main-navigation", ".footer-links"),
    ProviderType.DB: (".header-wrapper", ".footer-wrapper", ".db-navigation"),
    ProviderType.NS: (".ns-header", ".ns-footer", ".ns-navigation"),
    ProviderType.NATIONAL_RAIL: (".nr-header", ".nr-footer"),
    ProviderType.SNCF: (".sncf-header", ".sncf-footer"),
}

# Key of override entries that apply to every provider
ALL_PROVIDERS = "all"

PAGE_CSS = (
    "body{margin:0 !important;padding:0 !important;overflow-x:hidden;}"
    "*{-webkit-font-smoothing:antialiased;-moz-osx-font-smoothing:grayscale;}"
)


@dataclass(frozen=True)
class CleanupRules:
    """Predicates and selectors for cleaning upstream HTML."""

    removed_tags: tuple[str, ...] = REMOVED_TAGS
    attribute_patterns: tuple[str, ...] = ATTRIBUTE_PATTERNS
    hidden_selectors: tuple[str, ...] = HIDDEN_SELECTORS
    provider_selectors: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: dict(PROVIDER_SELECTORS)
    )

    def selectors_for(self, provider: str) -> tuple[str, ...]:
        """Hidden selectors for one provider: shared ones first."""
        return (
            self.hidden_selectors
            + tuple(self.provider_selectors.get(ALL_PROVIDERS, ()))
            + tuple(self.provider_selectors.get(provider, ()))
        )

    def stylesheet_for(self, provider: str) -> str:
        """CSS hiding the provider's selectors and normalizing body margins."""
        selectors = ",".join(self.selectors_for(provider))
        return f"{selectors}{{display:none !important;}}{PAGE_CSS}"

    def with_overrides(self, overrides: Mapping[str, list[str]]) -> CleanupRules:
        """Rules with extra hidden selectors per provider (or ``all``)."""
        if not overrides:
            return self
        merged = {key: tuple(value) for key, value in self.provider_selectors.items()}
        for provider, selectors in overrides.items():
            merged[provider] = merged.get(provider, ()) + tuple(selectors)
        return replace(self, provider_selectors=merged)


DEFAULT_CLEANUP_RULES = CleanupRules()
