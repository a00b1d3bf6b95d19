# chemistry/application/cms/unpublish_page.py
from typing import Optional
from flask import current_app
from sqlalchemy import select
from chemistry.extensions import db
from chemistry.models.page import Page
from chemistry.domain.exceptions import PageNotFound
from chemistry.domain.lifecycle.page import assert_page_transition
from chemistry.utils.transaction import transactional
from chemistry.utils.audit import log_action


def unpublish_page(
    *,
    page_id: str,
    actor_id: Optional[str] = None,
) -> Page:
    """
    Withdraws a page from public resolution by clearing published_at.

    The last published snapshot stays on the page and in its versions.
    """

    page = (
        db.session.execute(
            select(Page)
            .where(Page.id == page_id)
            .with_for_update()
        )
        .scalar_one_or_none()
    )

    if not page:
        raise PageNotFound()

    assert_page_transition(from_status=page.status, to_status="draft")

    with transactional():
        page.published_at = None

        log_action(
            action="page.unpublish",
            entity_type="page",
            entity_id=page.id,
            actor_id=actor_id,
            payload={"version": page.published_version},
        )

    current_app.logger.info("Unpublished page %s at %r", page.id, page.path)
    return page
