"""
Lead image URL cleaning.
"""

from __future__ import annotations

from urllib.parse import urljoin, urlparse


def clean_lead_image_url(lead_image_url: str, base_url: str = "") -> str | None:
    """Resolve ``lead_image_url`` against ``base_url`` and keep it only if it is an absolute http(s) URL."""
    candidate = (lead_image_url or "").strip()
    if not candidate:
        return None

    if base_url:
        candidate = urljoin(base_url, candidate)

    parsed = urlparse(candidate)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return None

    host = parsed.hostname or ""
    if "." not in host and ":" not in parsed.netloc and host != "localhost":
        return None

    return candidate
