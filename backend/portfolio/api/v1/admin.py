from flask import abort, request, jsonify
from flask_jwt_extended import jwt_required
from portfolio.data import get_client
from portfolio.domain.exceptions import ValidationError
from portfolio.extensions import db
from portfolio.application.admin import (
    SCREENS,
    MessageScreen,
    ProjectScreen,
    dashboard_summary,
)
from portfolio.utils.audit import log_action
from portfolio.utils.decorators import roles_required
from . import v1_bp


def _screen(screen_name):
    screen_cls = SCREENS.get(screen_name)
    if screen_cls is None:
        abort(404)
    return screen_cls(get_client())


@v1_bp.route("/admin/dashboard", methods=["GET"])
@jwt_required()
@roles_required("admin")
def admin_dashboard():
    return jsonify(dashboard_summary(get_client()))


# ------------------------
# Content screens
# ------------------------

@v1_bp.route("/admin/<screen_name>", methods=["GET"])
@jwt_required()
@roles_required("admin")
def list_records(screen_name):
    screen = _screen(screen_name)
    return jsonify({"items": screen.load()})


@v1_bp.route("/admin/<screen_name>/new", methods=["GET"])
@jwt_required()
@roles_required("admin")
def new_record_form(screen_name):
    screen = _screen(screen_name)
    return jsonify({"form": screen.blank_form()})


@v1_bp.route("/admin/<screen_name>/<record_id>", methods=["GET"])
@jwt_required()
@roles_required("admin")
def edit_record_form(screen_name, record_id):
    screen = _screen(screen_name)
    return jsonify({"form": screen.edit_form(record_id)})


@v1_bp.route("/admin/<screen_name>", methods=["POST"])
@jwt_required()
@roles_required("admin")
def create_record(screen_name):
    screen = _screen(screen_name)
    data = request.get_json(silent=True) or {}

    record = screen.save(data)

    log_action(
        action=f"{screen.collection}.create",
        entity_type=screen.collection,
        entity_id=record["id"],
        payload={"fields": sorted(k for k in data if k in screen.fields)}
    )
    db.session.commit()

    return jsonify(record), 201


@v1_bp.route("/admin/<screen_name>/<record_id>", methods=["PUT"])
@jwt_required()
@roles_required("admin")
def update_record(screen_name, record_id):
    screen = _screen(screen_name)
    data = request.get_json(silent=True) or {}

    record = screen.save(data, record_id=record_id)

    log_action(
        action=f"{screen.collection}.update",
        entity_type=screen.collection,
        entity_id=record_id,
        payload={"fields": sorted(k for k in data if k in screen.fields)}
    )
    db.session.commit()

    return jsonify(record), 200


@v1_bp.route("/admin/<screen_name>/<record_id>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
def delete_record(screen_name, record_id):
    screen = _screen(screen_name)
    screen.delete(record_id)

    log_action(
        action=f"{screen.collection}.delete",
        entity_type=screen.collection,
        entity_id=record_id,
    )
    db.session.commit()

    return jsonify({"message": f"{screen.entity.capitalize()} deleted successfully"}), 200


@v1_bp.route("/admin/<screen_name>/uploads", methods=["POST"])
@jwt_required()
@roles_required("admin")
def upload_record_file(screen_name):
    """
    Upload a file for a pending form. The returned form carries the public
    URL; it is only stored once the form itself is saved.
    """
    screen = _screen(screen_name)

    file = request.files.get("file")
    if file is None:
        raise ValidationError("No file selected", fields=["file"])

    form = screen.attach_file(request.form.to_dict(), file.filename, file.read())
    return jsonify({"form": form}), 201


@v1_bp.route("/admin/projects/<record_id>/status", methods=["POST"])
@jwt_required()
@roles_required("admin")
def toggle_project_status(record_id):
    project = ProjectScreen(get_client()).toggle_status(record_id)

    log_action(
        action="projects.status",
        entity_type="projects",
        entity_id=record_id,
        payload={"status": project["status"]}
    )
    db.session.commit()

    return jsonify(project), 200


# ------------------------
# Messages
# ------------------------

@v1_bp.route("/admin/messages", methods=["GET"])
@jwt_required()
@roles_required("admin")
def list_messages():
    return jsonify({"items": MessageScreen(get_client()).load()})


@v1_bp.route("/admin/messages/<message_id>/read", methods=["POST"])
@jwt_required()
@roles_required("admin")
def mark_message_read(message_id):
    message = MessageScreen(get_client()).mark_as_read(message_id)

    log_action(
        action="messages.read",
        entity_type="messages",
        entity_id=message_id,
    )
    db.session.commit()

    return jsonify(message), 200
