import re
import time
import unicodedata
from collections.abc import Awaitable, Callable
from pathlib import Path

from app.exceptions import SlugExhaustedError

MAX_SLUG_LENGTH = 80
MAX_SLUG_ATTEMPTS = 50

_NON_ALNUM = re.compile(r"[^a-z0-9]+")

SlugExists = Callable[[str, str], Awaitable[bool]]


def slugify(text) -> str:
    """Turn a title into a URL segment: accents stripped, lowercase, hyphenated, max 80 chars."""
    decomposed = unicodedata.normalize("NFD", str(text or ""))
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    slug = _NON_ALNUM.sub("-", stripped.lower()).strip("-")
    return slug[:MAX_SLUG_LENGTH]


async def unique_slug(lang: str, base_slug: str, exists: SlugExists, fallback: str = "item") -> str:
    """
    Find a free slug in the ``lang`` namespace.

    Tries ``base``, ``base-2``, ``base-3``... and returns the first candidate
    for which ``await exists(lang, candidate)`` is false.

    Raises:
        SlugExhaustedError: after MAX_SLUG_ATTEMPTS taken candidates.
    """
    base = base_slug or fallback
    for attempt in range(MAX_SLUG_ATTEMPTS):
        candidate = base if attempt == 0 else f"{base}-{attempt + 1}"
        if not await exists(lang, candidate):
            return candidate
    raise SlugExhaustedError(base, lang, MAX_SLUG_ATTEMPTS)


def generate_filename(original_filename: str, folder: str = "") -> str:
    """Storage path for an upload: ``folder/<stem>-<epoch ms><ext>``."""
    path = Path(original_filename or "file")
    ext = path.suffix.lower()
    stem = re.sub(r"[^a-z0-9]+", "-", path.stem.lower()).strip("-") or "file"
    name = f"{stem}-{int(time.time() * 1000)}{ext}"
    return f"{folder}/{name}" if folder else name
