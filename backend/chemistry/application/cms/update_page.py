from typing import Any, Dict, List, Optional
from chemistry.extensions import db
from chemistry.models.page import Page
from chemistry.models.section import Section
from chemistry.models.section_type import SectionType
from chemistry.models.social import Social
from chemistry.domain.exceptions import PageNotFound, ValidationError
from chemistry.domain.invariants.fields import assert_strings, integer_value, string_value
from chemistry.domain.invariants.page import assert_page
from chemistry.application.cms.reassign_page import UNCHANGED, restructure_page
from chemistry.utils.audit import log_action
from chemistry.utils.order import compact_order
from chemistry.utils.transaction import transactional


ALLOWED_UPDATE_FIELDS = {
    "title", "content", "excerpt", "masthead", "terms", "style",
    "private", "nav", "nav_name", "nav_position",
}
BOOLEAN_FIELDS = {"private", "nav"}
TEXT_FIELDS = ALLOWED_UPDATE_FIELDS - BOOLEAN_FIELDS - {"nav_position"}
STRUCTURAL_FIELDS = {"slug", "parent_id", "home"}
SECTION_FIELDS = ("prefix", "title", "primary_html", "secondary_html", "background_html")
SOCIAL_FIELDS = ("platform", "name", "reference", "url")


def update_page(
    *,
    page_id: str,
    actor_id: Optional[str],
    data: Dict[str, Any],
) -> Page:
    """
    Update draft fields on a page.

    Design rules:
    - Only whitelisted fields are mutable
    - No silent no-op updates
    - Published fields are never touched here
    - Slug, parent and home changes re-path the subtree
    - Invariants always revalidated
    """

    page = db.session.get(Page, page_id)
    if not page:
        raise PageNotFound()

    provided = (ALLOWED_UPDATE_FIELDS | STRUCTURAL_FIELDS | {"sections_data", "socials_data"}) & set(data)
    if not provided:
        # Explicitly fail instead of silently succeeding
        raise ValidationError.single("base", "no valid fields provided for update")

    changed_fields: list[str] = []

    with transactional():
        for field in sorted(ALLOWED_UPDATE_FIELDS & provided):
            value = _coerce(field, data[field])
            if getattr(page, field) != value:
                setattr(page, field, value)
                changed_fields.append(field)

        if STRUCTURAL_FIELDS & provided:
            old_path = page.path
            parent_id = UNCHANGED
            if "parent_id" in data:
                parent_id = data["parent_id"] or None
            restructure_page(
                page,
                parent_id=parent_id,
                slug=data.get("slug"),
                home=data.get("home"),
            )
            if page.path != old_path:
                changed_fields.append("path")

        if "sections_data" in data:
            apply_sections(page, data["sections_data"])
            changed_fields.append("sections")

        if "socials_data" in data:
            replace_socials(page, data["socials_data"])
            changed_fields.append("socials")

        # 🔒 Domain invariant enforcement
        assert_page(page)

        log_action(
            action="page.update",
            entity_type="page",
            entity_id=page.id,
            actor_id=actor_id,
            payload={
                "fields": changed_fields,
            },
        )

    return page


def apply_sections(page: Page, sections_data: List[Dict[str, Any]]) -> None:
    """
    Create, update or soft-delete sections from nested form data, then
    renumber the survivors 1..N in their requested order.
    """
    if not isinstance(sections_data, list):
        raise ValidationError.single("sections_data", "must be a list")

    existing = {s.id: s for s in page.live_sections}
    next_position = max((s.position for s in existing.values()), default=0)

    for item in sections_data:
        if not isinstance(item, dict):
            raise ValidationError.single("sections_data", "entries must be objects")
        assert_strings(item, ("id", "section_type_id") + SECTION_FIELDS)

        section_id = item.get("id")
        if section_id:
            section = existing.get(section_id)
            if section is None:
                raise ValidationError.single("sections_data", f"unknown section {section_id}")
        else:
            section = Section()
            next_position += 1
            section.position = next_position
            page.sections.append(section)

        if item.get("deleted_at"):
            section.soft_delete()
            continue

        if "section_type_id" in item:
            type_id = item["section_type_id"]
            if type_id and db.session.get(SectionType, type_id) is None:
                raise ValidationError.single("section_type_id", "does not exist")
            section.section_type_id = type_id or None

        if "position" in item:
            section.position = integer_value("position", item["position"])

        for field in SECTION_FIELDS:
            if field in item:
                setattr(section, field, item[field])

    compact_order(page.live_sections)


def replace_socials(page: Page, socials_data: List[Dict[str, Any]]) -> None:
    if not isinstance(socials_data, list):
        raise ValidationError.single("socials_data", "must be a list")

    page.socials.clear()

    for index, item in enumerate(socials_data, start=1):
        if not isinstance(item, dict):
            raise ValidationError.single("socials_data", "entries must be objects")
        assert_strings(item, SOCIAL_FIELDS)
        if not item.get("platform"):
            raise ValidationError.single("socials_data", "platform can't be blank")

        social = Social()
        social.position = integer_value("position", item.get("position", index))
        for field in SOCIAL_FIELDS:
            setattr(social, field, item.get(field))
        page.socials.append(social)

    compact_order(page.socials)


def _coerce(field, value):
    if field in BOOLEAN_FIELDS:
        return bool(value)
    if field == "nav_position":
        return integer_value(field, value)
    if field == "title":
        return string_value(field, value, strip=True) or ""
    if field in TEXT_FIELDS:
        return string_value(field, value)
    return value
