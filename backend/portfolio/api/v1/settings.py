from flask import request, jsonify
from flask_jwt_extended import jwt_required
from portfolio.data import get_client
from portfolio.domain.exceptions import ValidationError
from portfolio.extensions import db
from portfolio.application.admin import SettingsService
from portfolio.utils.audit import log_action
from portfolio.utils.decorators import roles_required
from . import v1_bp


@v1_bp.route("/admin/settings", methods=["GET"])
@jwt_required()
@roles_required("admin")
def get_settings():
    return jsonify(SettingsService(get_client()).get())


@v1_bp.route("/admin/settings/<kind>", methods=["POST"])
@jwt_required()
@roles_required("admin")
def upload_setting_asset(kind):
    file = request.files.get("file")
    if file is None:
        raise ValidationError("No file selected", fields=["file"])

    settings = SettingsService(get_client()).upload_asset(kind, file.filename, file.read())

    log_action(
        action="settings.upload",
        entity_type="site_settings",
        entity_id=None,
        payload={"kind": kind}
    )
    db.session.commit()

    return jsonify(settings), 200


@v1_bp.route("/admin/settings/<kind>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
def remove_setting_asset(kind):
    settings = SettingsService(get_client()).remove_asset(kind)

    log_action(
        action="settings.remove",
        entity_type="site_settings",
        entity_id=None,
        payload={"kind": kind}
    )
    db.session.commit()

    return jsonify(settings), 200
