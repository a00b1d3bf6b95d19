from chemistry.utils.timestamps import normalize_ts


def normalize_audit_log(log):
    """Audit rows as returned by the admin trail; payload is stored JSON."""
    created_at = normalize_ts(log.created_at)

    return {
        "id": log.id,
        "actor_id": log.actor_id,
        "action": log.action,
        "entity_type": log.entity_type,
        "entity_id": log.entity_id,
        "payload": log.payload or {},
        "created_at": created_at.isoformat() if created_at else None,
    }
