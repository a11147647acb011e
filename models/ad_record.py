# models/ad_record.py

from pydantic import BaseModel, field_validator
from typing import Optional


class AdRecord(BaseModel):
    """One ad card scraped from the ad library results page."""
    advertiser: str = "Unknown"
    adPreviewText: Optional[str] = None
    videoSrc: Optional[str] = None
    poster: Optional[str] = None
    image: Optional[str] = None

    @field_validator("advertiser", mode="before")
    @classmethod
    def _default_advertiser(cls, value):
        if value is None or not str(value).strip():
            return "Unknown"
        return str(value).strip()

    @field_validator("adPreviewText", "videoSrc", "poster", "image", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if value is None:
            return None
        value = str(value).strip()
        return value or None
