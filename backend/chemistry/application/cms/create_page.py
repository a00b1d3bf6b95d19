from typing import Any, Dict, Optional
from flask import current_app
from sqlalchemy import select
from chemistry.extensions import db
from chemistry.models.page import Page
from chemistry.domain.exceptions import ValidationError
from chemistry.domain.hierarchy import derive_path, set_home
from chemistry.domain.invariants.fields import integer_value, string_errors
from chemistry.domain.invariants.page import assert_page, normalize_slug, slug_errors
from chemistry.utils.audit import log_action
from chemistry.utils.transaction import transactional

TEXT_FIELDS = ("title", "slug", "parent_id", "content", "excerpt", "masthead", "terms", "style", "nav_name")


def create_page(
    *,
    actor_id: Optional[str],
    data: Dict[str, Any],
) -> Page:
    """
    Create a new CMS page in DRAFT state.

    Edge cases handled:
    - Missing required fields
    - Unknown parent
    - Duplicate path (slug already used under the same parent)
    """

    errors = string_errors(data, TEXT_FIELDS)
    if errors:
        raise ValidationError(errors)

    title: str = (data.get("title") or "").strip()
    slug: str | None = normalize_slug(data.get("slug"))

    errors = slug_errors(slug)
    if not title:
        errors.append(("title", "can't be blank"))
    if errors:
        raise ValidationError(errors)

    parent = None
    if data.get("parent_id"):
        parent = db.session.get(Page, data["parent_id"])
        if parent is None:
            raise ValidationError.single("parent_id", "does not exist")

    path = derive_path(parent.path if parent else None, slug)
    if db.session.execute(select(Page.id).where(Page.path == path)).first():
        raise ValidationError.single("slug", "has already been taken")

    page = Page()
    page.title = title
    page.slug = slug
    page.path = path
    page.parent = parent
    page.user_id = actor_id
    page.private = bool(data.get("private", False))
    page.content = data.get("content")
    page.excerpt = data.get("excerpt")
    page.masthead = data.get("masthead")
    page.terms = data.get("terms")
    page.style = data.get("style")
    page.nav = bool(data.get("nav", False))
    page.nav_name = data.get("nav_name")
    page.nav_position = integer_value("nav_position", data.get("nav_position", 0))
    page.home = False
    page.published_version = 0

    with transactional():
        db.session.add(page)
        db.session.flush()  # ensures page.id is available

        if data.get("home"):
            set_home(page)

        assert_page(page)

        log_action(
            action="page.create",
            entity_type="page",
            entity_id=page.id,
            actor_id=actor_id,
            payload={
                "title": page.title,
                "path": page.path,
            },
        )

    current_app.logger.info("Created page %s at %r", page.id, page.path)
    return page
