import re

from flask import current_app

from chemistry.domain.exceptions import ValidationError

SLUG_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


def normalize_slug(slug):
    if slug is None:
        return None
    slug = str(slug).strip()
    if not current_app.config.get("CHEMISTRY_CASE_SENSITIVE_PATHS", False):
        slug = slug.lower()
    return slug


def slug_errors(slug):
    if not slug:
        return [("slug", "can't be blank")]
    if not SLUG_PATTERN.match(slug):
        return [("slug", "may contain only letters, digits, hyphens and underscores")]
    return []


def assert_slug(slug):
    errors = slug_errors(slug)
    if errors:
        raise ValidationError(errors)


def assert_page(page, publish=False):
    errors = slug_errors(page.slug)

    if not (page.title or "").strip():
        errors.append(("title", "can't be blank"))

    if publish and not (page.published_title or "").strip():
        errors.append(("published_title", "can't be blank"))

    positions = [section.position for section in page.live_sections]
    expected = list(range(1, len(positions) + 1))

    if sorted(positions) != expected:
        errors.append(("sections", f"positions are not consecutive starting from 1: {positions}"))

    if errors:
        raise ValidationError(errors)
