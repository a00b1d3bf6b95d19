from typing import Optional
from flask import current_app
from chemistry.extensions import db
from chemistry.models.page import Page
from chemistry.domain.exceptions import PageNotFound, ValidationError
from chemistry.utils.audit import log_action
from chemistry.utils.transaction import transactional


def delete_page(
    *,
    page_id: str,
    actor_id: Optional[str] = None,
) -> None:
    """
    Hard-delete a page together with its sections, socials and versions.

    Pages that still have children are refused; move or delete the children
    first.
    """

    page = db.session.get(Page, page_id)

    if not page:
        raise PageNotFound()

    if page.child_pages:
        raise ValidationError.single("children", "must be moved or deleted first")

    path = page.path

    with transactional():
        db.session.delete(page)

        log_action(
            action="page.delete",
            entity_type="page",
            entity_id=page_id,
            actor_id=actor_id,
            payload={
                "path": path,
            },
        )

    current_app.logger.info("Deleted page %s at %r", page_id, path)
