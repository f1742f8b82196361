"""
Locale helpers

Pure functions for the fixed language set of the site:
- the ordered language tuple shared by every fallback chain
- Accept-Language header parsing with quality-value (q=) support
- language metadata and short localized messages
"""

from __future__ import annotations

# ── Constants ─────────────────────────────────────────────────────────────────

# Enumeration order of the supported languages. English comes first because it
# is the language content is usually written in first, so it is also the
# canonical fallback.
SUPPORTED_LANGUAGES: tuple[str, ...] = ("en", "sk", "hu")

# Fallback chain used by the variant and gallery owner resolvers
FALLBACK_ORDER: tuple[str, ...] = SUPPORTED_LANGUAGES

DEFAULT_LANGUAGE = "en"

LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "sk": "Slovenčina",
    "hu": "Magyar",
}

MESSAGES: dict[str, dict[str, str]] = {
    "not_found": {
        "en": "Not found",
        "sk": "Nenájdené",
        "hu": "Nem található",
    },
    "missing_title": {
        "en": "Please enter a title in at least one language.",
        "sk": "Zadajte názov aspoň v jednom jazyku.",
        "hu": "Adjon meg címet legalább egy nyelven.",
    },
    "missing_name": {
        "en": "Please enter a name.",
        "sk": "Zadajte meno.",
        "hu": "Adjon meg nevet.",
    },
    "missing_shared_fields": {
        "en": "Please provide the shared Date and Location.",
        "sk": "Zadajte spoločný dátum a miesto.",
        "hu": "Adja meg a közös dátumot és helyszínt.",
    },
    "slug_exhausted": {
        "en": "Could not generate a unique URL for this item.",
        "sk": "Pre túto položku sa nepodarilo vytvoriť jedinečnú URL.",
        "hu": "Nem sikerült egyedi URL-t létrehozni ehhez az elemhez.",
    },
    "auth_failed": {
        "en": "Authentication required",
        "sk": "Vyžaduje sa prihlásenie",
        "hu": "Bejelentkezés szükséges",
    },
}


# ── Public helpers ────────────────────────────────────────────────────────────


def is_supported_language(lang: str | None) -> bool:
    return lang in SUPPORTED_LANGUAGES


def normalize_language(lang: str | None, default: str = DEFAULT_LANGUAGE) -> str:
    """Return ``lang`` when it is supported, otherwise ``default``."""
    if lang and lang.strip().lower() in SUPPORTED_LANGUAGES:
        return lang.strip().lower()
    return default


def parse_accept_language(header: str, supported: list[str] | tuple[str, ...]) -> str | None:
    """Parse an Accept-Language header and return the best matching locale.

    Algorithm:
    1. Split header into tags with optional q-values (default q=1.0).
    2. Sort by q-value descending.
    3. For each tag, try exact match in `supported`, then base-language match.
    4. Return the first match or None if nothing matches.

    Args:
        header:    Value of the Accept-Language HTTP header, e.g.
                   "sk-SK,sk;q=0.9,en-US;q=0.8,en;q=0.7".
        supported: Ordered list of language codes the server supports.

    Returns:
        The best matching language from `supported`, or None.
    """
    if not header:
        return None

    # Parse "tag;q=value" pairs
    weighted: list[tuple[float, str]] = []
    for part in header.split(","):
        part = part.strip()
        if not part:
            continue
        if ";q=" in part:
            tag, q_str = part.split(";q=", 1)
            try:
                q = float(q_str.strip())
            except ValueError:
                q = 1.0
        else:
            tag = part
            q = 1.0
        weighted.append((q, tag.strip()))

    # Sort by quality value descending (stable sort preserves original order at same q)
    weighted.sort(key=lambda x: x[0], reverse=True)

    supported_lower = [s.lower() for s in supported]

    for _, tag in weighted:
        tag_lower = tag.lower()
        if tag_lower in supported_lower:
            return supported[supported_lower.index(tag_lower)]
        # Base language match: "sk-SK" → try "sk"
        base = tag_lower.split("-")[0]
        if base in supported_lower:
            return supported[supported_lower.index(base)]

    return None


def get_language_info(lang: str) -> dict[str, str]:
    """Return a metadata dict with ``code`` and ``name`` for the given language."""
    return {
        "code": lang,
        "name": LANGUAGE_NAMES.get(lang, lang),
    }


def translate(key: str, lang: str | None) -> str:
    """Look up a short localized message, falling back to English, then to the key."""
    entry = MESSAGES.get(key)
    if not entry:
        return key
    return entry.get(lang or DEFAULT_LANGUAGE) or entry.get(DEFAULT_LANGUAGE) or key
