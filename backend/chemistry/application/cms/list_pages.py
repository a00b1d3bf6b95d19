"""
Public listings over published pages: latest, children, navigation, bundle.
"""
from typing import List, Optional, Tuple
from flask import current_app
from sqlalchemy import select
from chemistry.extensions import db
from chemistry.models.page import Page
from chemistry.domain.exceptions import ValidationError
from chemistry.domain.freshness import Validator, aggregate_validator
from chemistry.domain.hierarchy import sibling_order
from chemistry.domain.permissions import visibility_clause, visibility_scope
from chemistry.domain.resolver import resolve

SORT_FIELDS = {
    "nav_position": Page.nav_position,
    "published_at": Page.published_at,
    "title": Page.published_title,
    "created_at": Page.created_at,
}
SORT_ORDERS = ("asc", "desc")


def _published(viewer):
    return select(Page).where(
        Page.published_at.is_not(None),
        visibility_clause(viewer),
    )


def latest_pages(
    *,
    parent_path: Optional[str] = None,
    limit: Optional[int] = None,
    viewer=None,
) -> Tuple[List[Page], Optional[Validator]]:
    """
    Most recently published pages, newest first, optionally scoped to the
    children of the page at ``parent_path``. The validator follows the
    newest member and is None while nothing is published.
    """
    if limit is None:
        limit = current_app.config.get("CHEMISTRY_LATEST_LIMIT", 1)
    if limit < 1:
        raise ValidationError.single("limit", "must be greater than zero")
    limit = min(limit, current_app.config.get("CHEMISTRY_MAX_PER_PAGE", 100))

    query = _published(viewer)

    if parent_path is not None:
        parent = resolve(parent_path, viewer)
        query = query.where(Page.parent_id == parent.id)

    pages = db.session.execute(
        query.order_by(Page.published_at.desc(), Page.id.desc()).limit(limit)
    ).scalars().all()

    return pages, aggregate_validator(pages, visibility_scope(viewer))


def child_pages(
    *,
    parent_path: str,
    sort_field: str = "nav_position",
    sort_order: str = "asc",
    page_number: int = 1,
    page_size: Optional[int] = None,
    viewer=None,
):
    """
    Paginated published children of the published page at ``parent_path``.

    Equal sort keys fall back to creation order, so pages never swap places
    between requests.
    """
    errors = []
    if sort_field not in SORT_FIELDS:
        errors.append(("sort", f"must be one of {', '.join(sorted(SORT_FIELDS))}"))
    if sort_order not in SORT_ORDERS:
        errors.append(("order", "must be asc or desc"))
    if page_number < 1:
        errors.append(("page", "must be greater than zero"))
    if page_size is not None and page_size < 1:
        errors.append(("per_page", "must be greater than zero"))
    if errors:
        raise ValidationError(errors)

    parent = resolve(parent_path, viewer)

    column = SORT_FIELDS[sort_field]
    primary = column.asc() if sort_order == "asc" else column.desc()

    query = (
        _published(viewer)
        .where(Page.parent_id == parent.id)
        .order_by(primary, Page.created_at.asc(), Page.id.asc())
    )

    return db.paginate(
        query,
        page=page_number,
        per_page=page_size or current_app.config.get("CHEMISTRY_CHILDREN_PER_PAGE", 20),
        max_per_page=current_app.config.get("CHEMISTRY_MAX_PER_PAGE", 100),
        error_out=False,
    )


def navigation_pages(*, viewer=None) -> List[Page]:
    return db.session.execute(
        _published(viewer).where(Page.nav.is_(True)).order_by(*sibling_order())
    ).scalars().all()


def bundle_validator(*, viewer=None) -> Optional[Validator]:
    """Cheap validator for the bundle: one row, the newest publish."""
    _, validator = latest_pages(limit=1, viewer=viewer)
    return validator


def bundle_pages(*, viewer=None) -> List[Page]:
    return db.session.execute(
        _published(viewer).order_by(Page.path.asc())
    ).scalars().all()
