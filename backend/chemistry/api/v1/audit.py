# chemistry/api/v1/audit.py
from flask import request, jsonify
from flask_jwt_extended import jwt_required
from sqlalchemy import select
from chemistry.models.audit_log import AuditLog
from chemistry.normalizers.audit import normalize_audit_log
from chemistry.normalizers.pagination import normalize_cursor_page
from chemistry.utils.decorators import roles_required
from chemistry.utils.pagination import paginate_cursor
from . import v1_bp

FILTERS = ("action", "entity_type", "entity_id", "actor_id")


@v1_bp.route("/audit", methods=["GET"])
@jwt_required()
@roles_required("admin")
def list_audit_logs():
    """Authoring history, newest first; ?cursor= continues a previous page."""
    limit = min(request.args.get("limit", 20, type=int), 100)

    query = select(AuditLog)
    for name in FILTERS:
        value = request.args.get(name)
        if value:
            query = query.where(getattr(AuditLog, name) == value)

    logs, meta = paginate_cursor(
        query,
        model=AuditLog,
        limit=limit,
        cursor=request.args.get("cursor"),
    )

    return jsonify(normalize_cursor_page(logs, normalize_audit_log, meta)), 200
