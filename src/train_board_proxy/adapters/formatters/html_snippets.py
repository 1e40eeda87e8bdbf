"""Shared markup for generated pages and injected tags."""

from markupsafe import Markup

NO_CACHE_META = Markup(
    '<meta http-equiv="Cache-Control" content="no-cache, no-store, must-revalidate">'
    '<meta http-equiv="Pragma" content="no-cache">'
    '<meta http-equiv="Expires" content="0">'
)

_BASE_STYLE = Markup(
    "<style>"
    "body{margin:0;padding:20px;font-family:Arial,Helvetica,sans-serif;background:#f4f5f7;}"
    ".board{max-width:1200px;margin:0 auto;background:#fff;border-radius:12px;padding:24px;}"
    ".board h1{color:#2d3a8c;font-size:28px;margin:0 0 24px;}"
    ".departures{width:100%;border-collapse:collapse;}"
    ".departures th{background:#2d3a8c;color:#fff;padding:12px;text-align:left;}"
    ".departures td{padding:12px;border-bottom:1px solid #dee2e6;}"
    ".departures tr:nth-child(even) td{background:#f8f9fa;}"
    ".delay-indicator{color:#c0392b;font-weight:bold;}"
    ".early-indicator{color:#1e8449;font-weight:bold;}"
    ".notice{max-width:640px;margin:40px auto;text-align:center;}"
    ".notice .detail{color:#555;font-size:14px;word-break:break-all;}"
    "</style>"
)


def auto_refresh_script(seconds: int) -> Markup:
    """Script reloading the page every ``seconds``; empty when disabled."""
    if seconds <= 0:
        return Markup("")
    return Markup("<script>setTimeout(function(){{window.location.reload();}},{});</script>").format(
        int(seconds) * 1000
    )


def render_document(title: str, body: Markup, refresh_seconds: int = 0) -> str:
    """Complete HTML document around ``body``."""
    return str(
        Markup(
            "<!DOCTYPE html>\n"
            '<html lang="en"><head><meta charset="utf-8">'
            '<meta name="viewport" content="width=device-width, initial-scale=1">'
            "{meta}<title>{title}</title>{style}</head>"
            "<body>{body}{script}</body></html>"
        ).format(
            meta=NO_CACHE_META,
            title=title,
            style=_BASE_STYLE,
            body=body,
            script=auto_refresh_script(refresh_seconds),
        )
    )
