# models/analyze_request.py

from pydantic import BaseModel
from typing import Optional, List, Union


def normalize_keywords(keywords: Union[str, List[str], None]) -> List[str]:
    """'a, b ,c' -> ['a', 'b', 'c']; lists are trimmed the same way, empties dropped."""
    if not keywords:
        return []
    parts = keywords.split(",") if isinstance(keywords, str) else keywords
    return [str(k).strip() for k in parts if str(k).strip()]


class AnalyzeRequest(BaseModel):
    # Optional here so a missing field becomes a 400 from the router, not a 422
    productTitle: Optional[str] = None
    targetCountry: Optional[str] = None
    keywords: Optional[Union[str, List[str]]] = None   # "a, b" or ["a", "b"]
    imageUrl: Optional[str] = None

    def missing_fields(self) -> List[str]:
        missing = []
        if not (self.productTitle or "").strip():
            missing.append("productTitle")
        if not (self.targetCountry or "").strip():
            missing.append("targetCountry")
        if not normalize_keywords(self.keywords):
            missing.append("keywords")
        return missing

    def keyword_list(self) -> List[str]:
        return normalize_keywords(self.keywords)
