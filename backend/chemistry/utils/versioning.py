def snapshot_page(page):
    """
    JSON copy of the live sections and socials, frozen at publish time.
    """
    return {
        "sections": [
            {
                "id": s.id,
                "section_type": s.section_type.slug if s.section_type else None,
                "position": s.position,
                "prefix": s.prefix,
                "title": s.title,
                "primary_html": s.primary_html,
                "secondary_html": s.secondary_html,
                "background_html": s.background_html,
            }
            for s in sorted(page.live_sections, key=lambda s: s.position)
        ],
        "socials": [
            {
                "position": so.position,
                "platform": so.platform,
                "name": so.name,
                "reference": so.reference,
                "url": so.url,
            }
            for so in sorted(page.socials, key=lambda so: so.position)
        ],
    }


def next_version(page_id):
    from chemistry.models.page_version import PageVersion

    last = (
        PageVersion.query
        .filter_by(page_id=page_id)
        .order_by(PageVersion.version.desc())
        .first()
    )
    return (last.version + 1) if last else 1
