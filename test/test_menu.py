"""
Tests for the navigation menu builder
"""

from types import SimpleNamespace

from app.utils.menu import NAV_ORDER, build_menu


def slugs(pages):
    return [p["slug"] if isinstance(p, dict) else p.slug for p in pages]


class TestBuildMenu:
    """Test navigation menu ordering"""

    def test_preferred_order_then_extras(self):
        """Test that preferred pages come first, then the rest"""
        pages = [{"slug": "contact"}, {"slug": "home"}, {"slug": "zz-extra"}, {"slug": "about-us"}]
        assert slugs(build_menu(pages)) == ["home", "about-us", "contact", "zz-extra"]

    def test_extras_sorted_case_insensitively_by_title(self):
        """Test that extra pages sort by title ignoring case"""
        pages = [
            {"slug": "b", "title": "banana"},
            {"slug": "a", "title": "Apple"},
            {"slug": "c", "title": "cherry"},
            {"slug": "home", "title": "Home"},
        ]
        assert slugs(build_menu(pages)) == ["home", "a", "b", "c"]

    def test_full_nav_order(self):
        """Test the full navigation order"""
        pages = [{"slug": slug, "title": slug} for slug in reversed(NAV_ORDER)]
        assert slugs(build_menu(pages)) == list(NAV_ORDER)

    def test_accepts_objects(self):
        """Test that page objects are accepted"""
        pages = [SimpleNamespace(slug="team", title="Team"), SimpleNamespace(slug="home", title="Home")]
        assert slugs(build_menu(pages)) == ["home", "team"]

    def test_empty_input(self):
        """Test that empty or None input gives an empty menu"""
        assert build_menu([]) == []
        assert build_menu(None) == []

    def test_missing_titles_do_not_break_sorting(self):
        """Test that missing titles do not break sorting"""
        pages = [{"slug": "x"}, {"slug": "y", "title": "A"}]
        assert slugs(build_menu(pages)) == ["x", "y"]

    def test_stable_for_repeated_calls(self):
        """Test that repeated calls give the same order"""
        pages = [{"slug": "news"}, {"slug": "partners", "title": "Partners"}, {"slug": "home"}]
        assert build_menu(pages) == build_menu(pages)
