"""Pages under audit and the URL-to-slug naming scheme for their reports."""

from __future__ import annotations

import re
from urllib.parse import quote, urlsplit

from pqa.errors import InvalidURLError

PAGES_TO_TEST: tuple[str, ...] = (
    "https://www.citadeltech.com.au/",
    "https://www.citadeltech.com.au/services/consulting-design",
    "https://www.citadeltech.com.au/services/installation-commissioning",
    "https://www.citadeltech.com.au/services/modern-audio-visual-integration",
    "https://www.citadeltech.com.au/services/concierge-services",
    "https://www.citadeltech.com.au/services/managed-services-and-support",
    "https://www.citadeltech.com.au/case-studies/act-traffic-management",
    "https://www.citadeltech.com.au/case-studies/brisbane-city-council",
    "https://www.citadeltech.com.au/case-studies/r8000",
    "https://www.citadeltech.com.au/case-studies/royal-adelaide-hospital",
    "https://www.citadeltech.com.au/about-us",
    "https://www.citadeltech.com.au/faqs",
    "https://www.citadeltech.com.au/contact",
)

HOME_SLUG = "home"

_EDGE_DASH = re.compile(r"^-|-$")

# Printable ASCII left as-is in a URL path; space, quotes, angle brackets,
# backtick, braces and non-ASCII get percent-encoded.
_PATH_SAFE = "/%!$&'()*+,;=:@-._~|^[]"

_SINGLE_DOT = {".", "%2e"}
_DOUBLE_DOT = {"..", ".%2e", "%2e.", "%2e%2e"}


def normalize_path(path: str) -> str:
    """Normalize a URL path the way a browser's ``URL.pathname`` does.

    Backslashes count as separators, ``.`` and ``..`` segments are resolved
    and the result is percent-encoded. An empty path becomes ``/``.
    """
    segments = path.replace("\\", "/").split("/")[1:]
    out: list[str] = []
    for i, seg in enumerate(segments):
        last = i == len(segments) - 1
        if seg.lower() in _DOUBLE_DOT:
            if out:
                out.pop()
            if last:
                out.append("")
        elif seg.lower() in _SINGLE_DOT:
            if last:
                out.append("")
        else:
            out.append(seg)
    return quote("/" + "/".join(out), safe=_PATH_SAFE)


def slugify(url: str) -> str:
    """Turn a URL path into a report file stem.

    For example: ``/services/consulting-design`` => ``services-consulting-design``.
    An empty or root path maps to ``home``.
    """
    try:
        parts = urlsplit(url)
    except ValueError as exc:
        raise InvalidURLError(f"Cannot parse URL {url!r}: {exc}") from exc
    if not parts.scheme or not parts.netloc:
        raise InvalidURLError(f"Not an absolute URL: {url!r}")

    pathname = normalize_path(parts.path)
    return _EDGE_DASH.sub("", pathname.replace("/", "-")) or HOME_SLUG
