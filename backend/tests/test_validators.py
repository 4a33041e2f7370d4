import pytest

from linkpreview.validators import detect_platform, extract_youtube_id, is_valid_url


@pytest.mark.parametrize("url", [
    "https://example.com",
    "http://example.com/path?q=1",
    "HTTPS://Example.com",
    "https://www.instagram.com/nasa/",
    "http://localhost:8080/",
])
def test_accepts_http_urls(url):
    assert is_valid_url(url)


@pytest.mark.parametrize("url", [
    "not-a-url",
    "",
    "   ",
    "example.com",
    "file:///etc/passwd",
    "javascript:alert(1)",
    "ftp://example.com/file",
    "data:text/html,<h1>hi</h1>",
    "http://",
    "https://example.com:notaport/",
    "https://exa mple.com",
    "http://exa<mple.com/",
    "http://[::1/",
    None,
    42,
])
def test_rejects_everything_else(url):
    assert not is_valid_url(url)


@pytest.mark.parametrize("url,platform", [
    ("https://www.facebook.com/zuck", "facebook"),
    ("https://www.instagram.com/nasa/", "instagram"),
    ("https://www.tiktok.com/@nasa", "tiktok"),
    ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", "youtube"),
    ("https://youtu.be/dQw4w9WgXcQ", "youtube"),
    ("https://example.com", "web"),
])
def test_detect_platform(url, platform):
    assert detect_platform(url) == platform


@pytest.mark.parametrize("url,video_id", [
    ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", "dQw4w9WgXcQ"),
    ("https://youtu.be/dQw4w9WgXcQ?t=10", "dQw4w9WgXcQ"),
    ("https://www.youtube.com/shorts/abcDEF12345", "abcDEF12345"),
    ("https://www.youtube.com/embed/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
    ("https://www.youtube.com/@channel", None),
    ("https://www.youtube.com/watch", None),
    ("https://example.com/watch?v=dQw4w9WgXcQ", None),
])
def test_extract_youtube_id(url, video_id):
    assert extract_youtube_id(url) == video_id
