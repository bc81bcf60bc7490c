"""Derive unique, filesystem-safe report names from site URLs."""

from __future__ import annotations

import hashlib
import re
from typing import Optional, Set

from .models import CSV_EXT, HTML_EXT, JSON_EXT, Site

MAX_NAME_LENGTH = 100
HASH_LENGTH = 7

_SCHEME_PATTERN = re.compile(r"^https?://")
_UNSAFE_CHARS = re.compile(r"[/?#:*$@!.]")
_HTTP_PREFIX = re.compile(r"^https?:")


def normalize_url(raw: str) -> str:
    """Return ``raw`` with an explicit scheme; bare hosts default to https."""
    url = raw.strip()
    if not _HTTP_PREFIX.match(url):
        if not url.startswith("//"):
            url = f"//{url}"
        url = f"https:{url}"
    return url


def site_name(url: str) -> str:
    """Turn a URL into a file name stem of at most 108 characters."""
    name = _UNSAFE_CHARS.sub("_", _SCHEME_PATTERN.sub("", url))
    if len(name) > MAX_NAME_LENGTH:
        digest = hashlib.sha1(name.encode("utf-8")).hexdigest()[:HASH_LENGTH]
        name = name[:MAX_NAME_LENGTH].rstrip("_")
        name = f"{name}_{digest}"
    return name


def derive_name(url: str, seen: Set[str]) -> str:
    """Return a name for ``url`` not yet in ``seen`` and record it there."""
    base = site_name(url)
    name = base
    suffix = 1
    while name in seen:
        name = f"{base}_{suffix}"
        suffix += 1
    seen.add(name)
    return name


class SiteNamer:
    """Build :class:`Site` entries whose names are unique within one run."""

    def __init__(self, seen: Optional[Set[str]] = None) -> None:
        self.seen: Set[str] = seen if seen is not None else set()

    def build(self, raw_url: str, html: bool = False, csv: bool = False) -> Site:
        url = normalize_url(raw_url)
        name = derive_name(url, self.seen)
        return Site(
            url=url,
            name=name,
            file=f"{name}{JSON_EXT}",
            html=f"{name}{HTML_EXT}" if html else None,
            csv=f"{name}{CSV_EXT}" if csv else None,
        )
