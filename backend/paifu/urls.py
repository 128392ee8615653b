"""Extraction of viewer URLs from article bodies."""

import re
from functools import lru_cache

from paifu.decoder import DEFAULT_VIEWER_HOST, FRAGMENT_MARKER


@lru_cache(maxsize=8)
def _viewer_url_pattern(host: str) -> re.Pattern[str]:
    # Article bodies are serialized HTML, so every embedded URL ends at a quote.
    return re.compile(rf'https?://{re.escape(host)}/[^"#\s]*{re.escape(FRAGMENT_MARKER)}[^"]*"')


def extract_log_urls(body: str, host: str = DEFAULT_VIEWER_HOST) -> list[str]:
    """Return viewer URLs found in `body`, deduplicated in first-seen order."""
    matches = (m.group(0)[:-1] for m in _viewer_url_pattern(host).finditer(body))
    return list(dict.fromkeys(matches))
