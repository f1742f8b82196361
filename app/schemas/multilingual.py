"""
Multilingual form schemas

Admin forms post one flat body with ``<field>_<lang>`` keys for translated
fields (``title_en``, ``description_sk``, ``slug_hu``) and plain keys for
fields shared by the whole group (``event_date``, ``sort_order``). The
adapter in this module turns such a body into a ``MultilingualForm`` right
at the HTTP boundary, so the replication code only ever works with a map
of languages.
"""

import re
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field

from app.content_kinds import BOOL, DATE, DATETIME, INT, LOCATION, ContentKind
from app.exceptions import ValidationError
from app.i18n import SUPPORTED_LANGUAGES

TRUTHY = {"on", "true", "1", "yes"}

_LOCATION_STRIP = re.compile(r"[()'\"]")
_WHITESPACE = re.compile(r"\s{2,}")


def is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


class MultilingualForm(BaseModel):
    """Posted values of one admin submission, keyed by language."""

    by_lang: dict[str, dict[str, str]] = Field(default_factory=dict)
    shared: dict[str, Any] = Field(default_factory=dict)
    slugs: dict[str, str] = Field(default_factory=dict)

    def posted(self, lang: str) -> dict[str, str]:
        """Values posted for ``lang``; whitespace-only values count as not posted."""
        values = self.by_lang.get(lang) or {}
        return {name: value for name, value in values.items() if not is_blank(value)}

    def slug(self, lang: str) -> str | None:
        value = self.slugs.get(lang)
        return None if is_blank(value) else value

    def filled_languages(self, fields: tuple[str, ...]) -> list[str]:
        """Languages with a non-blank value for any of ``fields``, in enumeration order."""
        return [
            lang for lang in SUPPORTED_LANGUAGES
            if any(name in self.posted(lang) for name in fields)
        ]


def sanitize_location(value: Any) -> str | None:
    """Drop parentheses and quotes and collapse repeated whitespace."""
    cleaned = _WHITESPACE.sub(" ", _LOCATION_STRIP.sub("", str(value or ""))).strip()
    return cleaned or None


def _text(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def coerce_shared_value(name: str, form_type: str, raw: str) -> Any:
    """
    Convert one posted shared value to its column type.

    Raises:
        ValidationError: when a number or date cannot be parsed.
    """
    try:
        if form_type == INT:
            return int(raw)
        if form_type == DATE:
            return date.fromisoformat(raw)
        if form_type == DATETIME:
            return datetime.fromisoformat(raw)
    except ValueError as e:
        raise ValidationError(f"Invalid value for {name}: {raw!r}", field=name) from e
    if form_type == LOCATION:
        return sanitize_location(raw)
    return raw


def parse_multilingual_form(form: Mapping[str, Any], kind: ContentKind) -> MultilingualForm:
    """
    Build a MultilingualForm from a flat form body.

    Values are stripped and empty strings count as not posted. Checkbox
    fields are the exception: an absent checkbox means False, so they are
    always present in ``shared``.
    """
    by_lang: dict[str, dict[str, str]] = {}
    slugs: dict[str, str] = {}
    for lang in SUPPORTED_LANGUAGES:
        values = {}
        for name in kind.translatable:
            value = _text(form.get(f"{name}_{lang}"))
            if value:
                values[name] = value
        by_lang[lang] = values
        if kind.has_slug:
            slug = _text(form.get(f"slug_{lang}"))
            if slug:
                slugs[lang] = slug

    shared: dict[str, Any] = {}
    for name, form_type in kind.shared.items():
        raw = _text(form.get(name))
        if form_type == BOOL:
            shared[name] = raw.lower() in TRUTHY
            continue
        if not raw:
            continue
        value = coerce_shared_value(name, form_type, raw)
        if value is not None:
            shared[name] = value

    return MultilingualForm(by_lang=by_lang, shared=shared, slugs=slugs)


# Sections of a static page, numbered 1..PAGE_SECTION_COUNT in form keys
PAGE_SECTION_COUNT = 4


class PageForm(BaseModel):
    """
    Posted values of the multi-language page editor.

    A language or section missing from a map was not posted and keeps its
    stored value. ``section_images`` maps a zero-based section index to a new
    image URL, or to ``""`` when the image is removed.
    """

    titles: dict[str, str] = Field(default_factory=dict)
    contents: dict[str, str] = Field(default_factory=dict)
    section_texts: dict[str, dict[int, str]] = Field(default_factory=dict)
    section_images: dict[int, str] = Field(default_factory=dict)

    @property
    def touches_sections(self) -> bool:
        return bool(self.section_images) or any(self.section_texts.values())


def parse_page_form(form: Mapping[str, Any]) -> PageForm:
    """
    Build a PageForm from ``title_<lang>``, ``content_<lang>``,
    ``section_text_<n>_<lang>`` and ``section_remove_image_<n>`` keys.

    Unlike titles, a posted empty content or section text is kept as an
    explicit clear. Section image uploads are added by the caller once stored.
    """
    page_form = PageForm()
    for lang in SUPPORTED_LANGUAGES:
        title = _text(form.get(f"title_{lang}"))
        if title:
            page_form.titles[lang] = title
        content = form.get(f"content_{lang}")
        if isinstance(content, str):
            page_form.contents[lang] = content.strip()

        texts = {}
        for number in range(1, PAGE_SECTION_COUNT + 1):
            text = form.get(f"section_text_{number}_{lang}")
            if isinstance(text, str):
                texts[number - 1] = text.strip()
        if texts:
            page_form.section_texts[lang] = texts

    for number in range(1, PAGE_SECTION_COUNT + 1):
        if _text(form.get(f"section_remove_image_{number}")) == "1":
            page_form.section_images[number - 1] = ""
    return page_form
