from collections.abc import Iterable, Mapping
from typing import Any

# Preferred navigation order by page slug
NAV_ORDER: tuple[str, ...] = (
    "home",
    "about-us",
    "focus-areas",
    "themes",
    "events",
    "team",
    "gdpr",
    "contact",
    "news",
    "documents",
)


def _get(page: Any, name: str) -> Any:
    if isinstance(page, Mapping):
        return page.get(name)
    return getattr(page, name, None)


def build_menu(pages: Iterable[Any] | None) -> list[Any]:
    """
    Order pages for the navigation bar.

    Pages whose slug is in NAV_ORDER come first, in that order; the rest
    follow sorted case-insensitively by title. Accepts mappings or objects
    with ``slug``/``title`` attributes. A later page with a duplicate slug
    replaces the earlier one.
    """
    by_slug: dict[Any, Any] = {}
    for page in pages or []:
        by_slug[_get(page, "slug")] = page

    ordered = []
    for slug in NAV_ORDER:
        if slug in by_slug:
            ordered.append(by_slug.pop(slug))

    extras = sorted(by_slug.values(), key=lambda p: str(_get(p, "title") or "").casefold())
    return ordered + extras
