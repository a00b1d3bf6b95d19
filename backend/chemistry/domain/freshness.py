"""
Cache validators for conditional GETs.

A validator pairs an opaque entity tag with the Last-Modified time. Both are
derived from the stored page alone, so computing one never touches the
serializers.
"""
import hashlib
from datetime import datetime
from typing import Iterable, NamedTuple, Optional

from chemistry.utils.timestamps import normalize_ts


class Validator(NamedTuple):
    etag: str
    last_modified: Optional[datetime]


def version_token(page, scope: Optional[str] = None) -> str:
    published_at = normalize_ts(page.published_at)
    parts = (
        "pages",
        scope or "",
        page.id,
        str(page.published_version or 0),
        page.path or "",
        published_at.isoformat() if published_at else "",
        "nav" if page.nav else "",
        page.nav_name or "",
        str(page.nav_position or 0),
    )
    return "|".join(parts)


def page_validator(page, scope: Optional[str] = None) -> Validator:
    """``scope`` names the audience when the served body depends on it."""
    etag = hashlib.md5(version_token(page, scope).encode("utf-8")).hexdigest()
    return Validator(etag=etag, last_modified=normalize_ts(page.published_at))


def latest_member(pages: Iterable) -> Optional[object]:
    """Most recently published member; ties go to the greater id."""
    published = [p for p in pages if p.published_at is not None]
    if not published:
        return None
    return max(published, key=lambda p: (normalize_ts(p.published_at), p.id))


def aggregate_validator(pages: Iterable, scope: Optional[str] = None) -> Optional[Validator]:
    """
    An aggregate is unchanged exactly when its most recently published
    member is unchanged. Listings filtered by visibility pass their
    ``scope``, since the same newest member can head different sets.
    """
    latest = latest_member(pages)
    if latest is None:
        return None
    return page_validator(latest, scope)


def is_fresh(validator: Optional[Validator], if_none_match=None, if_modified_since=None) -> bool:
    """
    True when the client's cached copy is still good.

    ``if_none_match`` is a werkzeug ETags set (or any container of tags);
    an entity-tag match decides on its own. Otherwise Last-Modified is
    compared at the one-second resolution of HTTP dates.
    """
    if validator is None:
        return False

    if if_none_match:
        return validator.etag in if_none_match or "*" in if_none_match

    if if_modified_since is not None and validator.last_modified is not None:
        last_modified = validator.last_modified.replace(microsecond=0)
        return last_modified <= normalize_ts(if_modified_since)

    return False
