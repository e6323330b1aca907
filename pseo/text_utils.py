"""Small text and URL helpers shared by the generators and scorers."""
from __future__ import annotations

import datetime as dt
import math
import re
from urllib.parse import urlparse

DEFAULT_PROVIDER_NAME = "API Provider"
WORDS_PER_MINUTE = 200

_SLUG_STRIP = re.compile(r"[^\w\s-]", re.ASCII)
_SLUG_SEPARATORS = re.compile(r"[\s_-]+", re.ASCII)


def _split_url(url: str | None):
    if not url:
        return None
    try:
        parsed = urlparse(url.strip())
        # Accessing ``port`` validates the authority section.
        parsed.port
    except ValueError:
        return None
    if not parsed.scheme or not parsed.netloc:
        return None
    return parsed


def is_valid_url(url: str | None) -> bool:
    """Return True for an absolute URL with a scheme and a host."""
    return _split_url(url) is not None


def valid_url(url: str | None) -> str | None:
    """Return the stripped ``url`` when it is absolute, else ``None``."""
    return url.strip() if is_valid_url(url) else None


def extract_base_url(url: str | None) -> str | None:
    """Return ``scheme://host[:port]``, or ``None`` for unparseable input."""
    parsed = _split_url(url)
    if parsed is None:
        return None
    host = parsed.netloc.rpartition("@")[2]
    return f"{parsed.scheme}://{host}"


def extract_provider_name(url: str | None) -> str:
    """Guess the provider's name from the second-level domain of ``url``."""
    parsed = _split_url(url)
    if parsed is None or not parsed.hostname:
        return DEFAULT_PROVIDER_NAME
    parts = parsed.hostname.split(".")
    return parts[-2] if len(parts) > 1 else parsed.hostname


def slugify(text: str) -> str:
    value = _SLUG_STRIP.sub("", text.lower().strip())
    value = _SLUG_SEPARATORS.sub("-", value)
    return value.strip("-")


def truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def word_count(text: str | None) -> int:
    return len((text or "").split())


def reading_time_minutes(words: int) -> int:
    return math.ceil(words / WORDS_PER_MINUTE)


def format_number(value: float) -> str:
    """Render ``120.0`` as ``120`` and keep genuine fractions."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def has_text(value: str | None) -> bool:
    return bool(value and value.strip())


def utc_now_iso() -> str:
    now = dt.datetime.now(dt.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
