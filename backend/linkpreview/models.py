from typing import List, Literal, Optional, Union

from pydantic import BaseModel

NO_TITLE = "No title"


class PreviewRequest(BaseModel):
    url: str
    mode: Optional[Literal["single", "collection"]] = None


class PreviewResult(BaseModel):
    title: str = NO_TITLE
    description: str = ""
    image: str = ""
    url: str
    blocked: bool = False
    followers: Optional[str] = None
    following: Optional[str] = None
    postsCount: Optional[str] = None
    youtubeId: Optional[str] = None


class ContentItem(BaseModel):
    """One embedded thumbnail found after scrolling; only the image carries data"""
    image: str
    type: Literal["post"] = "post"
    title: str = ""
    description: str = ""
    url: str = ""
    blocked: bool = False


class ItemsResponse(BaseModel):
    items: List[Union[PreviewResult, ContentItem]]


class ErrorResponse(BaseModel):
    error: str
