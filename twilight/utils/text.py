import re
from datetime import datetime, timedelta, timezone

import humanize

# ASCII word characters only: "#café" yields "#caf"
HASHTAG_PATTERN = re.compile(r"#\w+", re.ASCII)


def extract_hashtags(text: str) -> list[str]:
    """Hashtags in order of first appearance, duplicates removed, case kept."""
    seen = []
    for tag in HASHTAG_PATTERN.findall(text or ""):
        if tag not in seen:
            seen.append(tag)
    return seen


def format_since(created_at: datetime | None, now: datetime | None = None) -> str:
    """Relative age of a timestamp, e.g. "5 minutes ago"."""
    if created_at is None:
        return ""
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    # clock skew between app and database must not read as the future
    return humanize.naturaltime(max(now - created_at, timedelta(0)))
