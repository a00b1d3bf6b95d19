"""
Request path to published page.
"""
from typing import Callable, Optional

from flask import current_app
from sqlalchemy import select

from chemistry.extensions import db
from chemistry.models.page import Page
from chemistry.domain.exceptions import PageNotFound
from chemistry.domain.permissions import can_view as default_can_view


def normalize_path(raw: Optional[str], case_sensitive: Optional[bool] = None) -> str:
    """
    Strip surrounding whitespace and exactly one leading and one trailing
    slash. The empty string addresses the home page.
    """
    path = (raw or "").strip()
    if path.startswith("/"):
        path = path[1:]
    if path.endswith("/"):
        path = path[:-1]

    if case_sensitive is None:
        case_sensitive = current_app.config.get("CHEMISTRY_CASE_SENSITIVE_PATHS", False)
    if not case_sensitive:
        path = path.lower()

    return path


def published_at_path(path: str) -> Optional[Page]:
    return db.session.execute(
        select(Page).where(Page.path == path, Page.published_at.is_not(None))
    ).scalar_one_or_none()


def _visible_at(path, viewer, can_view) -> Optional[Page]:
    page = published_at_path(path)
    if page is None or not can_view(viewer, page):
        return None
    return page


def resolve(raw_path: Optional[str], viewer=None, can_view: Callable = default_can_view) -> Page:
    """
    Exact-match lookup of a published page the viewer may see.
    Raises PageNotFound otherwise.
    """
    path = normalize_path(raw_path)
    page = _visible_at(path, viewer, can_view)
    if page is None:
        current_app.logger.warning("No published page at path %r", path)
        raise PageNotFound(path)

    return page


def resolve_not_found(viewer=None, can_view: Callable = default_can_view) -> Page:
    """
    The configured not-found page, itself resolved like any other path.
    The miss that led here is already logged, so a missing 404 page is
    only noted at debug level.
    """
    path = normalize_path(current_app.config.get("CHEMISTRY_NOT_FOUND_PATH", "404"))
    page = _visible_at(path, viewer, can_view)
    if page is None:
        current_app.logger.debug("No published not-found page at %r", path)
        raise PageNotFound(path)

    return page
