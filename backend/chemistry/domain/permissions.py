from sqlalchemy import true

from chemistry.models.page import Page


def can_view(user, page) -> bool:
    """Public pages are visible to everyone, private ones to signed-in users."""
    if not page.private:
        return True
    return user is not None and bool(getattr(user, "is_active", False))


def visibility_clause(user):
    """SQL counterpart of can_view, for listings that filter in the query."""
    if user is not None and getattr(user, "is_active", False):
        return true()
    return Page.private.is_(False)


def visibility_scope(user) -> str:
    """Names the page set visibility_clause admits for this user."""
    if user is not None and getattr(user, "is_active", False):
        return "private"
    return "public"
