def normalize_social(social):
    return {
        "position": social.position,
        "platform": social.platform,
        "name": social.name,
        "reference": social.reference,
        "url": social.url,
    }
