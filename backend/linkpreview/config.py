import os
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

PREVIEW_MODES = ("single", "collection")

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/117.0.0.0 Safari/537.36"
)


def _split(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


class Settings:
    def __init__(self):
        self.preview_mode = os.getenv("PREVIEW_MODE", "single").strip().lower()
        if self.preview_mode not in PREVIEW_MODES:
            raise ValueError(f"PREVIEW_MODE must be one of {PREVIEW_MODES}, got {self.preview_mode!r}")

        self.navigation_timeout_ms = int(os.getenv("NAVIGATION_TIMEOUT_MS", "30000"))
        self.settle_delay_ms = int(os.getenv("SETTLE_DELAY_MS", "5000"))
        self.scroll_offset_px = int(os.getenv("SCROLL_OFFSET_PX", "2000"))
        self.max_content_items = int(os.getenv("MAX_CONTENT_ITEMS", "10"))

        # Hostname fragments of the platform CDNs that serve feed content
        self.content_cdn_fragments = _split(os.getenv("CONTENT_CDN_FRAGMENTS", "cdninstagram,fbcdn"))
        self.profile_pic_fragments = _split(os.getenv("PROFILE_PIC_FRAGMENTS", "profile_pic"))

        self.user_agent = os.getenv("USER_AGENT", DEFAULT_USER_AGENT)
        self.cors_origins = _split(os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:3001"))
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()


@lru_cache()
def get_settings() -> Settings:
    return Settings()
