"""Formatter re-serving an upstream HTML board with its page chrome removed."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup, Declaration, Doctype, NavigableString, Tag

from train_board_proxy.adapters.formatters.base import FetchingBoardFormatter
from train_board_proxy.adapters.formatters.cleanup_rules import DEFAULT_CLEANUP_RULES, CleanupRules
from train_board_proxy.adapters.formatters.html_snippets import NO_CACHE_META, auto_refresh_script
from train_board_proxy.domain.errors import FormatError, FormatErrorReason

if TYPE_CHECKING:
    from train_board_proxy.domain.models import FetchResult, Station

logger = logging.getLogger(__name__)

_URL_ATTRIBUTES = ("href", "src", "action")
_PROTECTED_TAGS = {"html", "head", "body"}
# url(/x), url("//cdn/x"), ...
_CSS_URL = re.compile(r"""url\(\s*(['"]?)(//?)""")


class HtmlPassthroughFormatter(FetchingBoardFormatter):
    """Cleans an upstream HTML page and injects styles and refresh tags.

    The page is parsed into a tree; header/footer/nav elements and elements
    whose class or id matches a cookie/consent/ad pattern are removed;
    root-relative links are pointed at the upstream origin; a style block,
    no-cache meta tags and an auto-refresh script are injected.

    Unrecoverable: an empty body raises ``FormatError(EMPTY_PAGE)``. Pages
    without ``<head>``/``<body>`` are handled by creating a head.
    """

    def __init__(self, rules: CleanupRules = DEFAULT_CLEANUP_RULES, refresh_seconds: int = 60):
        self.rules = rules
        self.refresh_seconds = refresh_seconds

    def format(self, station: Station, result: FetchResult) -> str:
        if not result.body.strip():
            raise FormatError(
                FormatErrorReason.EMPTY_PAGE, f"{station.provider} returned an empty page"
            )

        soup = BeautifulSoup(result.body, "html.parser")
        removed = self.remove_chrome(soup)
        self.absolutize_urls(soup, result.origin)
        self.inject(soup, station.provider)
        logger.debug(f"Cleaned {station.slug}: removed {removed} element(s)")
        return str(soup)

    def remove_chrome(self, soup: BeautifulSoup) -> int:
        """Remove chrome elements; returns how many subtrees were dropped."""
        candidates = [tag for tag in soup.find_all(True) if self._is_chrome(tag)]
        removed = 0
        for tag in candidates:
            # A candidate may sit inside one that was already removed
            if tag.decomposed:
                continue
            tag.decompose()
            removed += 1
        return removed

    def _is_chrome(self, tag: Tag) -> bool:
        if tag.name in _PROTECTED_TAGS:
            return False
        if tag.name in self.rules.removed_tags:
            return True
        classes = tag.get("class") or []
        if isinstance(classes, str):
            classes = [classes]
        element_id = tag.get("id") or ""
        haystack = " ".join([*classes, str(element_id)]).lower()
        return any(pattern in haystack for pattern in self.rules.attribute_patterns)

    @staticmethod
    def absolutize_urls(soup: BeautifulSoup, origin: str) -> None:
        """Point root-relative and protocol-relative URLs at the upstream site."""
        for attribute in _URL_ATTRIBUTES:
            for tag in soup.find_all(attrs={attribute: True}):
                value = tag[attribute]
                if not isinstance(value, str):
                    continue
                if value.startswith("//"):
                    tag[attribute] = f"https:{value}"
                elif value.startswith("/"):
                    tag[attribute] = f"{origin}{value}"

        for tag in soup.find_all(style=True):
            tag["style"] = absolutize_css(tag["style"], origin)
        for style in soup.find_all("style"):
            if style.string:
                style.string = absolutize_css(style.string, origin)

    def inject(self, soup: BeautifulSoup, provider: str) -> None:
        """Add the style block, no-cache meta tags and refresh script."""
        head = soup.head
        if head is None:
            head = soup.new_tag("head")
            if soup.html is not None:
                soup.html.insert(0, head)
            elif soup.body is not None:
                soup.body.insert_before(head)
            else:
                soup.insert(_after_prolog(soup), head)

        style = soup.new_tag("style")
        style.string = self.rules.stylesheet_for(provider)
        head.append(BeautifulSoup(str(NO_CACHE_META), "html.parser"))
        head.append(style)

        script = auto_refresh_script(self.refresh_seconds)
        if script:
            target = soup.body or soup
            target.append(BeautifulSoup(str(script), "html.parser"))


def absolutize_css(css: str, origin: str) -> str:
    """Point root-relative and protocol-relative ``url()`` references at ``origin``."""

    def replace(match: re.Match[str]) -> str:
        quote, slashes = match.groups()
        prefix = "https://" if slashes == "//" else f"{origin}/"
        return f"url({quote}{prefix}"

    return _CSS_URL.sub(replace, css)


def _after_prolog(soup: BeautifulSoup) -> int:
    """Index of the first node after a leading doctype, declarations and whitespace."""
    index = 0
    for node in soup.contents:
        if isinstance(node, (Doctype, Declaration)):
            index += 1
        elif isinstance(node, NavigableString) and not node.strip():
            index += 1
        else:
            break
    return index
