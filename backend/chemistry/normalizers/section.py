def normalize_section(section, admin=False):
    data = {
        "id": section.id,
        "section_type": section.section_type.slug if section.section_type else None,
        "position": section.position,
        "prefix": section.prefix,
        "title": section.title,
        "primary_html": section.primary_html,
        "secondary_html": section.secondary_html,
        "background_html": section.background_html,
    }

    if admin:
        data["section_type_id"] = section.section_type_id
        data["updated_at"] = section.updated_at.isoformat() if section.updated_at else None

    return data


def normalize_section_type(section_type):
    return {
        "id": section_type.id,
        "slug": section_type.slug,
        "title": section_type.title,
        "description": section_type.description,
    }
