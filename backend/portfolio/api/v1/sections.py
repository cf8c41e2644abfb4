from flask import current_app, request, jsonify
from flask_jwt_extended import jwt_required
from portfolio.data import get_client
from portfolio.domain.exceptions import ValidationError
from portfolio.extensions import db
from portfolio.application.sections import SectionStore, SectionOrderManager
from portfolio.normalizers.section import normalize_section
from portfolio.utils.audit import log_action
from portfolio.utils.decorators import roles_required
from . import v1_bp


def _section_manager():
    client = get_client()
    return SectionOrderManager(
        client,
        SectionStore(client),
        gate=current_app.extensions["reorder_gate"],
    )


def _registry_payload(store):
    return {
        "items": [normalize_section(s) for s in store.sections],
        # Shared order_index values are reported, never repaired here
        "order_conflicts": {
            str(index): names for index, names in store.conflicts.items()
        },
    }


@v1_bp.route("/admin/sections", methods=["GET"])
@jwt_required()
@roles_required("admin")
def list_sections():
    manager = _section_manager()
    manager.list_sections()
    return jsonify(_registry_payload(manager.store))


@v1_bp.route("/admin/sections/<section_id>/visibility", methods=["POST"])
@jwt_required()
@roles_required("admin")
def toggle_section_visibility(section_id):
    manager = _section_manager()
    manager.list_sections()
    before = manager.store.find(section_id)
    section = manager.toggle_visibility(section_id)

    # A failed write comes back as the stored, unchanged section
    toggled = before is None or section.is_visible != before.is_visible
    if toggled:
        log_action(
            action="section.visibility",
            entity_type="section",
            entity_id=section.id,
            payload={"name": section.name, "is_visible": section.is_visible}
        )
        db.session.commit()

    return jsonify({
        "status": "toggled" if toggled else "reverted",
        "section": normalize_section(section),
        **_registry_payload(manager.store)
    }), 200


@v1_bp.route("/admin/sections/move", methods=["POST"])
@jwt_required()
@roles_required("admin")
def move_section():
    data = request.get_json(silent=True) or {}

    try:
        index = int(data.get("index"))
    except (TypeError, ValueError):
        raise ValidationError("Section index must be an integer", fields=["index"]) from None

    manager = _section_manager()
    manager.list_sections()
    result = manager.move_section(index, data.get("direction"))

    if result.status == "rejected":
        return jsonify({
            "error": "Reorder already in progress",
            "status": result.status,
            **_registry_payload(manager.store)
        }), 409

    if result.status == "moved":
        log_action(
            action="section.reorder",
            entity_type="section",
            entity_id=None,
            payload={"index": index, "direction": data.get("direction")}
        )
        db.session.commit()

    return jsonify({
        "status": result.status,
        **_registry_payload(manager.store)
    }), 200
