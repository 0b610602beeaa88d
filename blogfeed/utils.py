import datetime
import math

WORDS_PER_MINUTE = 200


def calculate_reading_time(text: str) -> str:
    words = text.split()
    minutes = math.ceil(len(words) / WORDS_PER_MINUTE) or 1
    return f"{minutes} min"


def parse_published_at(value: str) -> datetime.datetime:
    """
    Parse a ``publishedAt`` value into an aware UTC datetime.

    Accepts date-only (``2024-01-01``) and ISO date-times, including the
    ``Z`` suffix Velog uses. Naive values are read as UTC so that local and
    remote posts compare on the same clock.
    """
    text = (value or "").strip()
    if not text:
        raise ValueError("publishedAt is empty")
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed.astimezone(datetime.timezone.utc)


def _to_local_naive(value: str) -> datetime.datetime:
    # date-only input parses as midnight; "T" or a space may separate the time
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def relative_label(target: datetime.datetime, now: datetime.datetime) -> str:
    # calendar-field differences, not elapsed time
    years_ago = now.year - target.year
    months_ago = now.month - target.month
    days_ago = now.day - target.day

    if years_ago > 0:
        return f"{years_ago}y ago"
    if months_ago > 0:
        return f"{months_ago}mo ago"
    if days_ago > 0:
        return f"{days_ago}d ago"
    return "Today"


def format_date(
    date: str,
    include_relative: bool = False,
    now: datetime.datetime | None = None,
) -> str:
    """Render ``date`` as ``January 1, 2024``, optionally with ``(1y ago)``."""
    target = _to_local_naive(date)
    full_date = f"{target.strftime('%B')} {target.day}, {target.year}"
    if not include_relative:
        return full_date

    now = now or datetime.datetime.now()
    return f"{full_date} ({relative_label(target, now)})"
