from typing import Any, Dict
from sqlalchemy import select
from chemistry.extensions import db
from chemistry.models.section_type import SectionType
from chemistry.domain.exceptions import ValidationError
from chemistry.domain.invariants.fields import string_errors
from chemistry.domain.invariants.page import SLUG_PATTERN
from chemistry.utils.transaction import transactional


def create_section_type(*, data: Dict[str, Any]) -> SectionType:
    errors = string_errors(data, ("slug", "title", "description"))
    if errors:
        raise ValidationError(errors)

    slug = (data.get("slug") or "").strip().lower()
    title = (data.get("title") or "").strip()

    errors = []
    if not slug or not SLUG_PATTERN.match(slug):
        errors.append(("slug", "is invalid"))
    if not title:
        errors.append(("title", "can't be blank"))
    if errors:
        raise ValidationError(errors)

    if db.session.execute(select(SectionType.id).where(SectionType.slug == slug)).first():
        raise ValidationError.single("slug", "has already been taken")

    section_type = SectionType()
    section_type.slug = slug
    section_type.title = title
    section_type.description = data.get("description")

    with transactional():
        db.session.add(section_type)

    return section_type
