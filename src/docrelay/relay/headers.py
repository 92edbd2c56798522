"""Static CORS headers and the header policy for relayed file streams."""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import quote

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

STREAM_CACHE_CONTROL = "public, max-age=31536000"

# Overridden below, or meaningless once the body is re-framed for the client.
_DROPPED_PROVIDER_HEADERS = frozenset(
    {
        "access-control-allow-origin",
        "cache-control",
        "connection",
        "content-disposition",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "set-cookie",
        "te",
        "trailer",
        "transfer-encoding",
        "upgrade",
    }
)


def inline_disposition(filename: str) -> str:
    """Build an `inline` Content-Disposition for `filename`.

    Non-ASCII names get an ASCII fallback plus an RFC 5987 `filename*` value.
    """
    fallback = "".join(ch if 32 <= ord(ch) < 127 else "_" for ch in filename)
    fallback = fallback.replace("\\", "\\\\").replace('"', '\\"')
    disposition = f'inline; filename="{fallback}"'
    if not filename.isascii():
        disposition += f"; filename*=UTF-8''{quote(filename, safe='')}"
    return disposition


def relay_headers(provider_headers: Mapping[str, str], filename: str) -> dict[str, str]:
    """Copy provider response headers and force inline, cacheable, cross-origin access."""
    headers: dict[str, str] = {}
    decoded = "content-encoding" in {key.lower() for key in provider_headers}
    for key, value in provider_headers.items():
        lowered = key.lower()
        if lowered in _DROPPED_PROVIDER_HEADERS:
            continue
        # The client library already decoded the body, so encoding and length no longer apply.
        if decoded and lowered in {"content-encoding", "content-length"}:
            continue
        headers[key] = value

    headers["Content-Disposition"] = inline_disposition(filename)
    headers["Access-Control-Allow-Origin"] = "*"
    headers["Cache-Control"] = STREAM_CACHE_CONTROL
    return headers
