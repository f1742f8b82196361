"""
i18n package

Language constants, fallback order, Accept-Language parsing and short
localized messages for the multilingual content system.
"""

from .locale import (
    DEFAULT_LANGUAGE,
    FALLBACK_ORDER,
    LANGUAGE_NAMES,
    MESSAGES,
    SUPPORTED_LANGUAGES,
    get_language_info,
    is_supported_language,
    normalize_language,
    parse_accept_language,
    translate,
)

__all__ = [
    "DEFAULT_LANGUAGE",
    "FALLBACK_ORDER",
    "LANGUAGE_NAMES",
    "MESSAGES",
    "SUPPORTED_LANGUAGES",
    "get_language_info",
    "is_supported_language",
    "normalize_language",
    "parse_accept_language",
    "translate",
]
