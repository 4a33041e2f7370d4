import re
from urllib.parse import parse_qs, urlparse
from typing import Optional

from pydantic import HttpUrl, TypeAdapter, ValidationError

ALLOWED_SCHEMES = ("http", "https")

# Order matters: the first matching host fragment wins
PLATFORM_HOSTS = (
    ("facebook", ("facebook.com",)),
    ("instagram", ("instagram.com",)),
    ("tiktok", ("tiktok.com",)),
    ("youtube", ("youtube.com", "youtu.be")),
)

_YOUTUBE_ID = re.compile(r"^[A-Za-z0-9_-]{6,}$")

_http_url = TypeAdapter(HttpUrl)


def is_valid_url(url) -> bool:
    """True only for absolute http(s) URLs with a well-formed host"""
    if not isinstance(url, str) or not url.strip():
        return False
    try:
        parsed = _http_url.validate_python(url.strip())
    except ValidationError:
        return False
    return parsed.scheme in ALLOWED_SCHEMES and bool(parsed.host)


def detect_platform(url: str) -> str:
    for platform, fragments in PLATFORM_HOSTS:
        if any(fragment in url for fragment in fragments):
            return platform
    return "web"


def extract_youtube_id(url: str) -> Optional[str]:
    """
    Pull the video id out of the common YouTube URL shapes:
    watch?v=<id>, youtu.be/<id>, /shorts/<id> and /embed/<id>.
    """
    try:
        parsed = urlparse(url)
    except ValueError:
        return None

    host = (parsed.hostname or "").lower()
    segments = [s for s in parsed.path.split("/") if s]
    candidate = None

    if host.endswith("youtu.be"):
        candidate = segments[0] if segments else None
    elif host.endswith("youtube.com"):
        if segments[:1] == ["watch"]:
            candidate = parse_qs(parsed.query).get("v", [None])[0]
        elif len(segments) >= 2 and segments[0] in ("shorts", "embed", "live"):
            candidate = segments[1]

    if candidate and _YOUTUBE_ID.match(candidate):
        return candidate
    return None
