"""Tests for path derivation, moves, renames and the home page."""

import pytest
from sqlalchemy import select

from chemistry.extensions import db
from chemistry.models.page import Page
from chemistry.domain.exceptions import CycleError, ValidationError
from chemistry.domain.hierarchy import ancestor_ids, derive_path, subtree
from chemistry.application.cms.delete_page import delete_page
from chemistry.application.cms.reassign_page import reassign_page
from chemistry.application.cms.update_page import update_page


def _paths():
    return dict(db.session.execute(select(Page.slug, Page.path)).all())


# ============================================================
# Path derivation
# ============================================================


class TestDerivePath:
    def test_root_page_uses_its_slug(self):
        assert derive_path(None, "about") == "about"

    def test_child_joins_parent_path(self):
        assert derive_path("about", "team") == "about/team"

    def test_child_of_home_sits_at_top_level(self):
        assert derive_path("", "news") == "news"

    def test_home_page_has_empty_path(self):
        assert derive_path(None, "home", home=True) == ""
        assert derive_path("about", "home", home=True) == ""


class TestCreatePaths:
    def test_nested_paths(self, make_page):
        about = make_page("about")
        team = make_page("team", parent=about)
        people = make_page("people", parent=team)

        assert about.path == "about"
        assert team.path == "about/team"
        assert people.path == "about/team/people"

    def test_slug_is_lowercased(self, make_page):
        page = make_page("About-Us")

        assert page.slug == "about-us"
        assert page.path == "about-us"

    def test_duplicate_sibling_slug_rejected(self, make_page):
        make_page("about")

        with pytest.raises(ValidationError) as exc_info:
            make_page("about")

        assert exc_info.value.errors == [("slug", "has already been taken")]

    def test_same_slug_under_different_parents(self, make_page):
        about = make_page("about")
        blog = make_page("blog")

        assert make_page("team", parent=about).path == "about/team"
        assert make_page("team", parent=blog).path == "blog/team"

    def test_invalid_slug_rejected(self, make_page):
        with pytest.raises(ValidationError) as exc_info:
            make_page("not a slug")

        assert exc_info.value.errors[0][0] == "slug"

    def test_blank_title_rejected(self, make_page):
        with pytest.raises(ValidationError) as exc_info:
            make_page("about", title="   ")

        assert ("title", "can't be blank") in exc_info.value.errors

    def test_unknown_parent_rejected(self, make_page):
        with pytest.raises(ValidationError):
            make_page("team", parent_id="missing")


# ============================================================
# Renames and moves
# ============================================================


class TestRename:
    def test_renaming_ancestor_updates_descendants(self, make_page):
        about = make_page("about")
        team = make_page("team", parent=about)
        people = make_page("people", parent=team)

        update_page(page_id=about.id, actor_id=None, data={"slug": "company"})

        assert db.session.get(Page, about.id).path == "company"
        assert db.session.get(Page, team.id).path == "company/team"
        assert db.session.get(Page, people.id).path == "company/team/people"

    def test_rename_onto_existing_path_leaves_tree_unchanged(self, make_page):
        about = make_page("about")
        make_page("team", parent=about)
        make_page("company")

        with pytest.raises(ValidationError):
            update_page(page_id=about.id, actor_id=None, data={"slug": "company"})

        assert _paths() == {"about": "about", "team": "about/team", "company": "company"}

    def test_rename_through_reassign(self, make_page):
        about = make_page("about")
        team = make_page("team", parent=about)

        reassign_page(page_id=team.id, new_parent_id=about.id, new_slug="staff")

        assert db.session.get(Page, team.id).path == "about/staff"


class TestMove:
    def test_move_carries_subtree(self, make_page):
        about = make_page("about")
        team = make_page("team", parent=about)
        people = make_page("people", parent=team)
        company = make_page("company")

        reassign_page(page_id=team.id, new_parent_id=company.id)

        assert db.session.get(Page, team.id).path == "company/team"
        assert db.session.get(Page, people.id).path == "company/team/people"
        assert db.session.get(Page, team.id).parent_id == company.id

    def test_move_to_top_level(self, make_page):
        about = make_page("about")
        team = make_page("team", parent=about)

        reassign_page(page_id=team.id, new_parent_id=None)

        page = db.session.get(Page, team.id)
        assert page.parent_id is None
        assert page.path == "team"

    def test_move_under_descendant_is_rejected(self, make_page):
        about = make_page("about")
        team = make_page("team", parent=about)
        people = make_page("people", parent=team)
        before = _paths()

        with pytest.raises(CycleError):
            reassign_page(page_id=about.id, new_parent_id=people.id)

        assert _paths() == before
        assert db.session.get(Page, about.id).parent_id is None

    def test_move_under_itself_is_rejected(self, make_page):
        about = make_page("about")

        with pytest.raises(CycleError):
            reassign_page(page_id=about.id, new_parent_id=about.id)

    def test_move_to_missing_parent(self, make_page):
        about = make_page("about")

        with pytest.raises(ValidationError) as exc_info:
            reassign_page(page_id=about.id, new_parent_id="missing")

        assert exc_info.value.errors == [("parent_id", "does not exist")]

    def test_move_onto_taken_path(self, make_page):
        about = make_page("about")
        blog = make_page("blog")
        make_page("team", parent=about)
        other = make_page("team", parent=blog)

        with pytest.raises(ValidationError):
            reassign_page(page_id=other.id, new_parent_id=about.id)

        assert db.session.get(Page, other.id).path == "blog/team"

    def test_ancestor_ids_walks_to_root(self, make_page):
        about = make_page("about")
        team = make_page("team", parent=about)
        people = make_page("people", parent=team)

        assert ancestor_ids(people.id) == {people.id, team.id, about.id}

    def test_subtree_is_breadth_first(self, make_page):
        about = make_page("about")
        team = make_page("team", parent=about, nav_position=1)
        make_page("history", parent=about, nav_position=2)
        make_page("people", parent=team)

        assert [p.slug for p in subtree(about)] == ["about", "team", "history", "people"]


# ============================================================
# Home page
# ============================================================


class TestHome:
    def test_home_page_has_empty_path(self, make_page):
        home = make_page("home", home=True)
        news = make_page("news", parent=home)

        assert home.path == ""
        assert news.path == "news"

    def test_second_home_demotes_first(self, make_page):
        home = make_page("home", home=True)
        make_page("news", parent=home)
        welcome = make_page("welcome")
        make_page("intro", parent=welcome)

        update_page(page_id=welcome.id, actor_id=None, data={"home": True})

        assert _paths() == {
            "home": "home",
            "news": "home/news",
            "welcome": "",
            "intro": "intro",
        }
        assert db.session.get(Page, home.id).home is False

    def test_unflag_home(self, make_page):
        home = make_page("home", home=True)

        update_page(page_id=home.id, actor_id=None, data={"home": False})

        assert db.session.get(Page, home.id).path == "home"


# ============================================================
# Delete policy
# ============================================================


class TestDelete:
    def test_delete_leaf(self, make_page):
        about = make_page("about")

        delete_page(page_id=about.id)

        assert db.session.get(Page, about.id) is None

    def test_delete_with_children_is_refused(self, make_page):
        about = make_page("about")
        team = make_page("team", parent=about)

        with pytest.raises(ValidationError) as exc_info:
            delete_page(page_id=about.id)

        assert exc_info.value.errors == [("children", "must be moved or deleted first")]
        assert db.session.get(Page, about.id) is not None
        assert db.session.get(Page, team.id).path == "about/team"
