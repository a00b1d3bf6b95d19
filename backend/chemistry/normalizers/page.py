from chemistry.utils.timestamps import normalize_ts
from .section import normalize_section
from .social import normalize_social


def _iso(ts):
    ts = normalize_ts(ts)
    return ts.isoformat() if ts else None


def normalize_page_summary(page):
    """Tree view for editors: structure and status, no content."""
    return {
        "id": page.id,
        "parent_id": page.parent_id,
        "slug": page.slug,
        "path": page.path,
        "home": page.home,
        "title": page.title,
        "status": page.status,
        "private": page.private,
        "nav": page.nav,
        "nav_name": page.nav_name,
        "nav_position": page.nav_position,
        "published_at": _iso(page.published_at),
        "updated_at": _iso(page.updated_at),
    }


def normalize_page(page, admin=False):
    if not admin:
        return normalize_published_page(page)

    data = normalize_page_summary(page)
    data.update({
        "content": page.content,
        "excerpt": page.excerpt,
        "masthead": page.masthead,
        "terms": page.terms,
        "style": page.style,
        "published_title": page.published_title,
        "published_html": page.published_html,
        "published_excerpt": page.published_excerpt,
        "published_version": page.published_version,
        "created_at": _iso(page.created_at),
        "sections": [
            normalize_section(s, admin=True)
            for s in sorted(page.live_sections, key=lambda s: s.position)
        ],
        "socials": [normalize_social(so) for so in page.socials],
    })
    return data


def normalize_published_page(page, include_content=True):
    """
    Public view, built only from the published snapshot so that draft edits
    never leak.
    """
    data = {
        "id": page.id,
        "path": page.path,
        "slug": page.slug,
        "home": page.home,
        "title": page.published_title,
        "excerpt": page.published_excerpt,
        "published_at": _iso(page.published_at),
        "nav": page.nav,
        "nav_name": page.nav_name,
        "nav_position": page.nav_position,
    }

    if include_content:
        snapshot = page.published_snapshot or {}
        data["html"] = page.published_html
        data["sections"] = snapshot.get("sections", [])
        data["socials"] = snapshot.get("socials", [])

    return data


def normalize_version(version):
    return {
        "id": version.id,
        "version": version.version,
        "published_at": _iso(version.published_at),
        "created_by": version.created_by,
        "title": version.snapshot.get("title"),
        "path": version.snapshot.get("path"),
    }
