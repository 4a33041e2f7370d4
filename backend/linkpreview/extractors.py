"""
Pure extraction over a rendered document.

The browser hands over the serialized DOM (``page.content()``) and the page's
current address; everything here is parsing, so it runs without a browser and
never touches page state.
"""

import re
from typing import Dict, Iterable, List
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from .models import NO_TITLE, ContentItem, PreviewResult

OG_PROPERTIES = {
    "title": "og:title",
    "description": "og:description",
    "image": "og:image",
    "url": "og:url",
}

# "<number><optional decimal><optional K/M> Keyword", keyword case-sensitive
_COUNT = r"(?<![\d.,])((?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d+)?[KkMm]?)\s+"
STAT_PATTERNS = {
    "followers": re.compile(_COUNT + r"Followers"),
    "following": re.compile(_COUNT + r"Following"),
    "postsCount": re.compile(_COUNT + r"Posts"),
}

LAZY_SRC_ATTRIBUTES = ("data-src", "data-lazy-src", "data-original")


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def _meta_content(soup: BeautifulSoup, prop: str) -> str:
    tag = soup.find("meta", attrs={"property": prop})
    if tag is None:
        return ""
    return tag.get("content") or ""


def read_open_graph(html: str) -> Dict[str, str]:
    """Raw og:* values keyed by field name, empty string when absent"""
    soup = _soup(html)
    return {field: _meta_content(soup, prop) for field, prop in OG_PROPERTIES.items()}


def parse_profile_stats(description: str) -> Dict[str, str]:
    """
    Scan a profile description such as
    "1.2K Followers, 340 Following, 58 Posts - See Instagram photos..."
    for follower/following/post counts. Only the first match per keyword
    is used; a missing keyword yields an empty string.
    """
    stats = {}
    for field, pattern in STAT_PATTERNS.items():
        match = pattern.search(description or "")
        stats[field] = match.group(1) if match else ""
    return stats


def extract_metadata(html: str, page_url: str) -> PreviewResult:
    """
    Build the primary preview record from Open Graph tags.

    ``blocked`` is true when the page has neither an og:title nor an
    og:image; a page without those tags is treated as a probable
    anti-bot or login wall.
    """
    og = read_open_graph(html)

    result = PreviewResult(
        title=og["title"] or NO_TITLE,
        description=og["description"],
        image=og["image"],
        url=og["url"] or page_url,
        blocked=not og["title"] and not og["image"],
    )

    if result.description:
        stats = parse_profile_stats(result.description)
        if any(stats.values()):
            result.followers = stats["followers"]
            result.following = stats["following"]
            result.postsCount = stats["postsCount"]

    return result


def _image_candidates(img, page_url: str) -> List[str]:
    """Every usable source of one <img>: src, lazy-load attributes, first srcset entry"""
    raw = [img.get("src")]
    raw.extend(img.get(attr) for attr in LAZY_SRC_ATTRIBUTES)

    srcset = img.get("srcset")
    if srcset:
        raw.append(srcset.split(",")[0].strip().split(" ")[0])

    candidates = []
    for candidate in raw:
        candidate = (candidate or "").strip()
        if not candidate or candidate.startswith("data:"):
            continue
        candidates.append(urljoin(page_url, candidate))
    return candidates


def image_candidates(html: str, page_url: str) -> List[List[str]]:
    """Resolved source candidates per image, in DOM order; images without any are skipped"""
    images = []
    for img in _soup(html).find_all("img"):
        candidates = _image_candidates(img, page_url)
        if candidates:
            images.append(candidates)
    return images


def is_content_image(src: str, cdn_fragments: Iterable[str], exclude_fragments: Iterable[str]) -> bool:
    return any(f in src for f in cdn_fragments) and not any(f in src for f in exclude_fragments)


def harvest_content_images(
    html: str,
    page_url: str,
    cdn_fragments: Iterable[str],
    exclude_fragments: Iterable[str],
    limit: int = 10,
) -> List[ContentItem]:
    """
    Content thumbnails served from a platform CDN, profile pictures excluded.

    An image qualifies when any of its sources does, so a placeholder ``src``
    does not hide the real URL in ``data-src``.
    """
    cdn_fragments = list(cdn_fragments)
    exclude_fragments = list(exclude_fragments)

    items = []
    for candidates in image_candidates(html, page_url):
        if len(items) >= limit:
            break
        src = next((c for c in candidates if is_content_image(c, cdn_fragments, exclude_fragments)), None)
        if src:
            items.append(ContentItem(image=src))
    return items
