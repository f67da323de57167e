"""Best-effort extraction of video ids from YouTube search-results markup."""

from __future__ import annotations

import re
from typing import Callable, Optional

TokenExtractor = Callable[[Optional[str]], Optional[str]]

VIDEO_ID_LENGTH = 11
VIDEO_ID_PATTERN: re.Pattern[str] = re.compile(r'"videoId":"([a-zA-Z0-9_-]{11})"')


def extract_first_video_id(html: Optional[str]) -> Optional[str]:
    """Return the first embedded ``"videoId":"..."`` token in document order, or None."""
    if not html:
        return None
    for match in VIDEO_ID_PATTERN.finditer(html):
        video_id = match.group(1)
        if len(video_id) == VIDEO_ID_LENGTH:
            return video_id
    return None
