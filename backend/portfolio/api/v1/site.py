# Public endpoints backing the portfolio page
from flask import request, jsonify
from portfolio.data import get_client
from portfolio.application.sections import SectionStore, PageComposer
from portfolio.application.admin import MessageScreen, SettingsService
from . import v1_bp


@v1_bp.route("/site/page", methods=["GET"])
def get_site_page():
    client = get_client()
    store = SectionStore(client)
    composer = PageComposer(client)

    composer.load(store)
    page = composer.compose(store)

    return jsonify(page.to_dict())


@v1_bp.route("/site/settings", methods=["GET"])
def get_site_settings():
    return jsonify(SettingsService(get_client()).get())


@v1_bp.route("/site/messages", methods=["POST"], endpoint="submit_message")
def submit_message():
    data = request.get_json(silent=True) or {}
    message = MessageScreen(get_client()).submit(data)

    return jsonify({
        "id": message["id"],
        "message": "Message sent successfully"
    }), 201
