from flask import request, jsonify
from flask_jwt_extended import jwt_required
from portfolio.models.audit_log import AuditLog
from portfolio.normalizers.audit import normalize_audit_log
from portfolio.utils.decorators import roles_required
from portfolio.utils.pagination import paginate_cursor
from . import v1_bp


@v1_bp.route("/admin/audit", methods=["GET"])
@jwt_required()
@roles_required("admin")
def list_audit_logs():
    limit = min(request.args.get("limit", 20, type=int), 100)
    cursor = request.args.get("cursor")

    query = AuditLog.query

    # Optional filters
    if action := request.args.get("action"):
        query = query.filter(AuditLog.action == action)

    if entity_type := request.args.get("entity_type"):
        query = query.filter(AuditLog.entity_type == entity_type)

    if entity_id := request.args.get("entity_id"):
        query = query.filter(AuditLog.entity_id == entity_id)

    logs, meta = paginate_cursor(query, model=AuditLog, cursor=cursor, limit=limit)

    return jsonify({
        "data": [normalize_audit_log(log) for log in logs],
        "meta": meta
    }), 200
