from typing import Set

from chemistry.domain.exceptions import ValidationError

# Republishing is allowed and supersedes the previous snapshot
ALLOWED_PAGE_TRANSITIONS: dict[str, Set[str]] = {
    "draft": {"published"},
    "published": {"published", "draft"},
}


def assert_page_transition(*, from_status: str, to_status: str) -> None:
    """
    Guards page lifecycle transitions.
    Single source of truth for status changes.
    """
    allowed = ALLOWED_PAGE_TRANSITIONS.get(from_status, set())

    if to_status not in allowed:
        raise ValidationError.single(
            "status", f"cannot change from {from_status} to {to_status}"
        )
