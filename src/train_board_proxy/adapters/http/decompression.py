"""Decoding of compressed response bodies."""

import gzip
import logging
import zlib
from collections.abc import Callable

import brotli

logger = logging.getLogger(__name__)


class DecompressionError(Exception):
    """A body declared as compressed could not be decompressed."""


def _inflate(data: bytes) -> bytes:
    # "deflate" is zlib-wrapped per RFC, but some servers send raw deflate
    try:
        return zlib.decompress(data)
    except zlib.error:
        return zlib.decompress(data, -zlib.MAX_WBITS)


_DECODERS: dict[str, Callable[[bytes], bytes]] = {
    "gzip": gzip.decompress,
    "x-gzip": gzip.decompress,
    "deflate": _inflate,
    "br": brotli.decompress,
}


def parse_content_encoding(header: str | None) -> list[str]:
    """Split a Content-Encoding header into lower-cased codings, in applied order."""
    if not header:
        return []
    return [part.strip().lower() for part in header.split(",") if part.strip()]


def decompress_body(data: bytes, content_encoding: str | None) -> bytes:
    """Undo the codings listed in ``content_encoding``.

    Codings are undone in reverse order of application. ``identity`` is a
    no-op; an unsupported coding stops decoding and the remaining bytes pass
    through unchanged.

    Raises:
        DecompressionError: If a supported coding fails to decode.
    """
    for coding in reversed(parse_content_encoding(content_encoding)):
        if coding == "identity":
            continue
        decoder = _DECODERS.get(coding)
        if decoder is None:
            logger.warning(f"Unsupported Content-Encoding '{coding}', passing body through raw")
            return data
        try:
            data = decoder(data)
        except (OSError, EOFError, zlib.error, brotli.error) as e:
            raise DecompressionError(f"Could not decode {coding} body: {e}") from e
    return data
