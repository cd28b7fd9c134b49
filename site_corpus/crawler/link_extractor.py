# site_corpus/crawler/link_extractor.py
"""
Content and link extraction for SiteCorpus.

The DOM is read inside the rendered page by :data:`EXTRACT_SCRIPT`, which
returns raw title/text/link/button data. Everything after that (whitespace
cleanup, href resolution, filtering, display lines) happens here in Python.
"""
from __future__ import annotations

import re
from typing import Any, List, Mapping, Optional, Sequence
from urllib.parse import urljoin, urlsplit, urlunsplit

from site_corpus.crawler.models import UNTITLED_PAGE, LinkRecord, PageRecord

LINK_SELECTORS: Sequence[str] = (
    "a[href]",
    "nav a",
    "header a",
    "footer a",
    '[role="navigation"] a',
    ".menu a",
    ".nav a",
    ".navbar a",
    ".dropdown a",
    "ul li a",
)

_SKIPPED_SCHEMES = ("javascript", "mailto", "tel")
_WHITESPACE_RE = re.compile(r"\s+")

# Elements matched by several selectors are collected once (Set of nodes).
EXTRACT_SCRIPT = """
(selectors) => {
    if (!document.body) {
        return null;
    }
    const elements = new Set();
    selectors.forEach(selector => {
        document.querySelectorAll(selector).forEach(a => {
            if (a.href) elements.add(a);
        });
    });
    return {
        title: document.title || '',
        text: document.body.innerText || '',
        links: Array.from(elements).map(a => ({
            text: a.innerText || a.textContent || '',
            href: a.getAttribute('href'),
        })),
        buttons: Array.from(document.querySelectorAll('button')).map(b => b.innerText || ''),
    };
}
"""


def clean_text(text: Optional[str]) -> str:
    """Collapse whitespace runs to one space and strip the ends."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()


def _with_root_path(url: str) -> str:
    """`https://host?q=1` -> `https://host/?q=1`, the way browsers serialize it."""
    parts = urlsplit(url)
    if parts.scheme in ("http", "https") and parts.netloc and not parts.path:
        return urlunsplit((parts.scheme, parts.netloc, "/", parts.query, ""))
    return url


def normalize_href(href: Optional[str], base_url: str) -> Optional[str]:
    """
    Resolve *href* against the page origin and drop the fragment.

    Returns None for links that must not be listed or followed: empty hrefs,
    the bare origin, and javascript:/mailto:/tel: links.
    """
    href = (href or "").strip()
    if not href:
        return None
    try:
        resolved = href if href.startswith("http") else urljoin(base_url, href)
        resolved = _with_root_path(resolved.split("#", 1)[0])
    except ValueError:
        return None
    if not resolved or resolved in (base_url, base_url + "/"):
        return None
    if resolved.lower().startswith(_SKIPPED_SCHEMES):
        return None
    return resolved


def build_link(text: Optional[str], href: Optional[str], base_url: str) -> Optional[LinkRecord]:
    label = clean_text(text)
    if not label:
        return None
    normalized = normalize_href(href, base_url)
    if normalized is None:
        return None
    return LinkRecord(display_text=label, normalized_href=normalized)


def build_button(text: Optional[str]) -> Optional[str]:
    label = clean_text(text)
    return f"- [Button] {label}" if label else None


def build_page_record(raw: Optional[Mapping[str, Any]], source_url: str, base_url: str) -> PageRecord:
    """Turn the in-page result into a PageRecord; None means the page had no body."""
    if raw is None:
        return PageRecord.placeholder(source_url)

    links: List[LinkRecord] = []
    for item in raw.get("links") or []:
        link = build_link(item.get("text"), item.get("href"), base_url)
        if link is not None:
            links.append(link)

    buttons = [line for line in map(build_button, raw.get("buttons") or []) if line]

    return PageRecord(
        title=raw.get("title") or UNTITLED_PAGE,
        body_text=raw.get("text") or "",
        source_url=source_url,
        links=links,
        buttons=buttons,
    )


async def extract_page(session: Any, source_url: str, base_url: str) -> PageRecord:
    """Evaluate :data:`EXTRACT_SCRIPT` in *session* and build the page record."""
    raw = await session.evaluate(EXTRACT_SCRIPT, list(LINK_SELECTORS))
    return build_page_record(raw, source_url, base_url)
