"""
Small formatting helpers shared by the editors and page payloads.
"""
import re
from typing import List

_NON_ALNUM_RE = re.compile(r'[^a-z0-9]+')


def slugify(text: str) -> str:
    """URL slug from a title: lowercase, runs of other characters become '-'."""
    return _NON_ALNUM_RE.sub('-', text.lower()).strip('-')


def clamp(value: int, minimum: int, maximum: int) -> int:
    return min(max(value, minimum), maximum)


def parse_tags(raw: str) -> List[str]:
    """Split a comma-separated tag string, dropping empty entries."""
    return [tag.strip() for tag in (raw or "").split(',') if tag.strip()]
