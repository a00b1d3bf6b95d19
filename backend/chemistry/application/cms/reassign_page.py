from typing import List, Optional
from flask import current_app
from chemistry.extensions import db
from chemistry.models.page import Page
from chemistry.domain.exceptions import PageNotFound, ValidationError
from chemistry.domain.hierarchy import assert_acyclic, recompute_paths, set_home
from chemistry.domain.invariants.fields import string_value
from chemistry.domain.invariants.page import assert_slug, normalize_slug
from chemistry.utils.audit import log_action
from chemistry.utils.transaction import transactional

UNCHANGED = object()


def restructure_page(
    page: Page,
    *,
    parent_id=UNCHANGED,
    slug: Optional[str] = None,
    home: Optional[bool] = None,
) -> List[Page]:
    """
    Apply slug, parent and home changes, then re-path the subtree.

    Must run inside a transaction: a clash detected while re-pathing leaves
    earlier assignments to the caller's rollback.
    """
    if slug is not None:
        slug = normalize_slug(string_value("slug", slug))
        assert_slug(slug)

    if parent_id is not UNCHANGED:
        parent_id = string_value("parent_id", parent_id)

    if parent_id is not UNCHANGED and parent_id != page.parent_id:
        if parent_id is None:
            new_parent = None
        else:
            new_parent = db.session.get(Page, parent_id)
            if new_parent is None:
                raise ValidationError.single("parent_id", "does not exist")
            # nothing has been touched yet
            assert_acyclic(page, parent_id)
        page.parent = new_parent

    if slug is not None:
        page.slug = slug

    if home is not None and bool(home) != page.home:
        return set_home(page, bool(home))

    return recompute_paths(page)


def reassign_page(
    *,
    page_id: str,
    new_parent_id: Optional[str],
    new_slug: Optional[str] = None,
    actor_id: Optional[str] = None,
) -> Page:
    """
    Move a page under a new parent (None for the top level) and optionally
    rename it. The page and every descendant get their new paths in one
    transaction.
    """
    page = db.session.get(Page, page_id)
    if page is None:
        raise PageNotFound()

    old_path = page.path

    with transactional():
        changed = restructure_page(page, parent_id=new_parent_id, slug=new_slug)

        log_action(
            action="page.reassign",
            entity_type="page",
            entity_id=page.id,
            actor_id=actor_id,
            payload={
                "from": old_path,
                "to": page.path,
                "parent_id": page.parent_id,
                "repathed": len(changed),
            },
        )

    current_app.logger.info(
        "Moved page %s from %r to %r (%d paths rewritten)",
        page.id, old_path, page.path, len(changed),
    )
    return page
