"""Tests for request path resolution and visibility."""

import logging

import pytest

from chemistry.domain.exceptions import PageNotFound
from chemistry.domain.permissions import can_view
from chemistry.domain.resolver import normalize_path, resolve, resolve_not_found


class TestNormalizePath:
    def test_strips_one_slash_each_side(self, app):
        assert normalize_path("/about/team/") == "about/team"
        assert normalize_path("//about//") == "/about/"

    def test_strips_whitespace(self, app):
        assert normalize_path("  /about  ") == "about"

    def test_empty_means_home(self, app):
        assert normalize_path("") == ""
        assert normalize_path("/") == ""
        assert normalize_path(None) == ""

    def test_lowercases_by_default(self, app):
        assert normalize_path("About/Team") == "about/team"

    def test_case_sensitive(self, app):
        assert normalize_path("About/Team", case_sensitive=True) == "About/Team"


class TestResolve:
    def test_home_resolves_from_empty_path(self, make_page, publish):
        home = publish(make_page("home", home=True))

        assert resolve("").id == home.id
        assert resolve("/").id == home.id

    def test_draft_page_is_not_found(self, make_page):
        make_page("about")

        with pytest.raises(PageNotFound) as exc_info:
            resolve("about")

        assert exc_info.value.path == "about"

    def test_first_publish_makes_page_resolvable(self, make_page, publish):
        about = make_page("about")
        publish(about)

        assert resolve("/About/").id == about.id

    def test_exact_match_only(self, make_page, publish):
        publish(make_page("about"))

        with pytest.raises(PageNotFound):
            resolve("about/team")
        with pytest.raises(PageNotFound):
            resolve("abo")

    def test_nested_path(self, make_page, publish):
        about = publish(make_page("about"))
        team = publish(make_page("team", parent=about))

        assert resolve("about/team").id == team.id

    def test_private_page_hidden_from_anonymous(self, make_page, publish, editor):
        page = publish(make_page("members", private=True))

        with pytest.raises(PageNotFound):
            resolve("members")
        assert resolve("members", editor).id == page.id

    def test_inactive_viewer_cannot_see_private(self, make_page, publish, make_user):
        publish(make_page("members", private=True))
        viewer = make_user(email="gone@example.com", active=False)

        with pytest.raises(PageNotFound):
            resolve("members", viewer)

    def test_custom_visibility_predicate(self, make_page, publish):
        publish(make_page("about"))

        with pytest.raises(PageNotFound):
            resolve("about", can_view=lambda viewer, page: False)

    def test_resolution_is_repeatable(self, make_page, publish):
        publish(make_page("about"))

        assert resolve("about") is resolve("about")


class TestNotFoundPage:
    def test_configured_404_page(self, make_page, publish):
        missing = publish(make_page("404", title="Not here"))

        assert resolve_not_found().id == missing.id

    def test_no_404_page(self, app):
        with pytest.raises(PageNotFound):
            resolve_not_found()

    def test_missing_404_page_logged_at_debug(self, app, caplog):
        with caplog.at_level(logging.DEBUG, logger=app.logger.name):
            with pytest.raises(PageNotFound):
                resolve_not_found()

        levels = [r.levelno for r in caplog.records if r.name == app.logger.name]
        assert levels == [logging.DEBUG]


class TestCanView:
    def test_public_page_visible_to_all(self, make_page):
        page = make_page("about")

        assert can_view(None, page)

    def test_private_page_needs_viewer(self, make_page, editor):
        page = make_page("members", private=True)

        assert not can_view(None, page)
        assert can_view(editor, page)
