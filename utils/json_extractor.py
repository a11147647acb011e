# utils/json_extractor.py
from __future__ import annotations
import json
from typing import Any, Dict, Optional

from loguru import logger


def _balanced_end(text: str, start: int) -> Optional[int]:
    """Index of the '}' closing the '{' at `start`, ignoring braces inside JSON strings."""
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    return None


def extract_json_object(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Returns the first balanced {...} substring of `text` that parses as a JSON object.
    Prose, markdown fences and stray braces around the object are tolerated; anything else gives None.
    """
    if not text:
        return None

    start = text.find("{")
    while start != -1:
        end = _balanced_end(text, start)
        if end is not None:
            candidate = text[start:end + 1]
            try:
                data = json.loads(candidate)
            except json.JSONDecodeError as e:
                logger.debug(f"Discarding non-JSON brace block at {start}: {e}")
            else:
                if isinstance(data, dict):
                    return data
        start = text.find("{", start + 1)
    return None
