"""Tests for cache validators and conditional freshness checks."""

from datetime import datetime, timedelta, timezone

from chemistry.domain.freshness import Validator, aggregate_validator, is_fresh, page_validator
from chemistry.application.cms.list_pages import latest_pages
from chemistry.application.cms.publish_page import publish_page
from chemistry.application.cms.update_page import update_page

NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestPageValidator:
    def test_deterministic(self, make_page, publish):
        page = publish(make_page("about"))

        assert page_validator(page) == page_validator(page)

    def test_last_modified_is_publish_time(self, make_page):
        page = make_page("about")
        publish_page(page_id=page.id, now=NOW)

        assert page_validator(page).last_modified == NOW

    def test_republish_changes_etag(self, make_page):
        page = make_page("about")
        publish_page(page_id=page.id, now=NOW)
        before = page_validator(page)

        publish_page(page_id=page.id, now=NOW)

        assert page_validator(page).etag != before.etag

    def test_draft_edit_keeps_etag(self, make_page, publish):
        page = publish(make_page("about"))
        before = page_validator(page)

        update_page(page_id=page.id, actor_id=None, data={"content": "<p>unpublished</p>"})

        assert page_validator(page) == before

    def test_nav_change_changes_etag(self, make_page, publish):
        page = publish(make_page("about"))
        before = page_validator(page)

        update_page(page_id=page.id, actor_id=None, data={"nav": True, "nav_name": "About"})

        assert page_validator(page).etag != before.etag


class TestAggregateValidator:
    def test_empty_set(self):
        assert aggregate_validator([]) is None

    def test_latest_is_empty_until_first_publish(self, make_page):
        make_page("about")

        pages, validator = latest_pages(limit=1)

        assert pages == []
        assert validator is None

    def test_latest_validator_changes_after_publish(self, make_page):
        about = make_page("about")
        news = make_page("news")

        publish_page(page_id=about.id, now=NOW)
        pages, first = latest_pages(limit=1)
        assert [p.id for p in pages] == [about.id]

        publish_page(page_id=news.id, now=NOW + timedelta(minutes=5))
        pages, second = latest_pages(limit=1)
        assert [p.id for p in pages] == [news.id]

        assert first is not None
        assert second != first

    def test_follows_newest_member(self, make_page):
        about = make_page("about")
        news = make_page("news")
        publish_page(page_id=about.id, now=NOW)
        publish_page(page_id=news.id, now=NOW + timedelta(minutes=5))

        assert aggregate_validator([about, news]) == page_validator(news)

    def test_scoped_by_audience(self, make_page, publish, editor):
        news = publish(make_page("news"))

        assert aggregate_validator([news], "public") != aggregate_validator([news], "private")

        _, anonymous = latest_pages(limit=1)
        _, signed_in = latest_pages(limit=1, viewer=editor)
        assert anonymous.etag != signed_in.etag
        assert anonymous.last_modified == signed_in.last_modified


class TestIsFresh:
    validator = Validator(etag="abc123", last_modified=NOW.replace(microsecond=500))

    def test_no_validator_is_never_fresh(self):
        assert not is_fresh(None, ["abc123"], NOW)

    def test_matching_etag(self):
        assert is_fresh(self.validator, ["abc123"])

    def test_other_etag_wins_over_date(self):
        assert not is_fresh(self.validator, ["zzz"], NOW + timedelta(days=1))

    def test_wildcard_etag(self):
        assert is_fresh(self.validator, ["*"])

    def test_modified_since_same_second(self):
        assert is_fresh(self.validator, None, NOW)

    def test_modified_since_earlier(self):
        assert not is_fresh(self.validator, None, NOW - timedelta(seconds=1))

    def test_naive_header_treated_as_utc(self):
        assert is_fresh(self.validator, None, NOW.replace(tzinfo=None))

    def test_no_conditions(self):
        assert not is_fresh(self.validator)
