# chemistry/application/cms/publish_page.py
from datetime import datetime, timedelta
from typing import Any, Dict, Optional
from flask import current_app
from sqlalchemy import select
from chemistry.extensions import db
from chemistry.models.page import Page
from chemistry.models.page_version import PageVersion
from chemistry.domain.exceptions import PageNotFound, ValidationError
from chemistry.domain.invariants.fields import string_errors
from chemistry.domain.invariants.page import assert_page
from chemistry.domain.lifecycle.page import assert_page_transition
from chemistry.utils.transaction import transactional
from chemistry.utils.timestamps import normalize_ts, utcnow
from chemistry.utils.versioning import snapshot_page, next_version
from chemistry.utils.audit import log_action

PUBLISH_FIELDS = ("published_title", "published_html", "published_excerpt")


def publish_page(
    *,
    page_id: str,
    actor_id: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
    now: Optional[datetime] = None,
) -> Page:
    """
    Promote the current draft of a page into its published snapshot.

    Responsibilities:
    - validation before any published field is written
    - transactional boundary
    - version creation
    - audit logging

    Overrides stage publish-time content that differs from the draft;
    anything not overridden is taken from the draft fields.
    """
    overrides = dict(overrides or {})
    unknown = sorted(set(overrides) - set(PUBLISH_FIELDS))
    if unknown:
        raise ValidationError([(field, "is not a publishable field") for field in unknown])

    errors = string_errors(overrides, PUBLISH_FIELDS)
    if errors:
        raise ValidationError(errors)

    # 1️⃣ Fetch page with row-level lock
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

    # 2️⃣ Lifecycle transition and draft invariants
    assert_page_transition(from_status=page.status, to_status="published")
    assert_page(page)

    # 3️⃣ Resolve the new snapshot without touching the page
    title = overrides.get("published_title")
    if title is None:
        title = page.title
    html = overrides.get("published_html")
    if html is None:
        html = page.content
    excerpt = overrides.get("published_excerpt")
    if excerpt is None:
        excerpt = page.excerpt

    if not (title or "").strip():
        raise ValidationError.single("published_title", "can't be blank")

    stamp = normalize_ts(now or utcnow())
    previous = normalize_ts(page.published_at)
    if previous is not None and stamp <= previous:
        stamp = previous + timedelta(microseconds=1)

    snapshot = snapshot_page(page)

    with transactional():
        # 4️⃣ Apply state change in one go
        page.published_title = title.strip()
        page.published_html = html
        page.published_excerpt = excerpt
        page.published_snapshot = snapshot
        page.published_version = (page.published_version or 0) + 1
        page.published_at = stamp

        # 5️⃣ Create immutable PageVersion
        version = PageVersion()
        version.page_id = page.id
        version.version = next_version(page.id)
        version.published_at = stamp
        version.snapshot = {
            "title": page.published_title,
            "html": page.published_html,
            "excerpt": page.published_excerpt,
            "path": page.path,
            **snapshot,
        }
        version.created_by = actor_id

        db.session.add(version)
        db.session.flush()  # ensures version.version is available

        # 6️⃣ Audit logging
        log_action(
            action="page.publish",
            entity_type="page",
            entity_id=page.id,
            actor_id=actor_id,
            payload={"version": version.version},
        )

    current_app.logger.info("Published page %s at %r as version %d", page.id, page.path, version.version)
    return page
