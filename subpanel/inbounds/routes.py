from flask import Blueprint, Response, request, session, jsonify
from urllib.parse import quote
import logging
import re

from ..auth.decorators import login_required
from ..config import API_TOKEN
from ..core.restart import restart_flag
from ..subscription import (
    CONTENT_TYPE,
    InboundRecord,
    RecordNotFound,
    SubscriptionError,
    generate_clash_subscription,
    parse_inbound_id
)
from .utils import INBOUND_NOT_FOUND, get_inbounds, get_inbound, add_inbound, update_inbound, del_inbound

logger = logging.getLogger(__name__)

inbounds_bp = Blueprint('inbounds', __name__, url_prefix='/xui/inbound')

# Public download link handed to clients; no panel login.
clash_bp = Blueprint('clash', __name__)


_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def content_disposition(filename):
    filename = _CONTROL_CHARS.sub("_", filename)
    try:
        filename.encode("latin-1")
    except UnicodeEncodeError:
        # Header values must stay latin-1, see RFC 5987.
        return f"attachment; filename=\"{quote(filename)}\"; filename*=UTF-8''{quote(filename)}"
    return 'attachment; filename="{}"'.format(filename.replace('"', "'"))


def serve_clash_subscription(raw_id, token):
    """Shared body of both clash routes: validate id, fetch, translate, frame the response."""
    try:
        inbound_id = parse_inbound_id(raw_id)
        inbound = get_inbound(inbound_id, token)
        if inbound is None:
            raise RecordNotFound()
        subscription = generate_clash_subscription(InboundRecord.from_dict(inbound))
    except SubscriptionError as e:
        logger.warning(f"Clash subscription for inbound '{raw_id}' refused ({e.status_code}): {e.message}")
        return Response(e.message, status=e.status_code, mimetype="text/plain")

    logger.info(f"Serving clash subscription {subscription.filename} for inbound {inbound_id}")
    return Response(
        subscription.body,
        status=200,
        content_type=CONTENT_TYPE,
        headers={"Content-Disposition": content_disposition(subscription.filename)}
    )


@clash_bp.route("/clash/<inbound_id>", methods=["GET"])
def public_clash_subscription(inbound_id):
    return serve_clash_subscription(inbound_id, API_TOKEN)


@inbounds_bp.route("/clash/<inbound_id>", methods=["GET"])
@login_required
def clash_subscription(inbound_id):
    return serve_clash_subscription(inbound_id, session["token"])


def _parse_id_or_400(raw_id):
    try:
        return parse_inbound_id(raw_id), None
    except SubscriptionError as e:
        return None, (jsonify({"success": False, "error": e.message}), e.status_code)


def _inbound_payload():
    data = request.get_json(silent=True)
    if data is None:
        data = request.form.to_dict()
    return data if isinstance(data, dict) else None


@inbounds_bp.route("/list", methods=["POST"])
@login_required
def list_inbounds():
    inbounds = get_inbounds(session["token"])
    if inbounds is None:
        return jsonify({"success": False, "error": "Failed to fetch inbounds."}), 502
    return jsonify({"success": True, "obj": inbounds})


@inbounds_bp.route("/add", methods=["POST"])
@login_required
def add_inbound_api():
    data = _inbound_payload()
    if not data:
        return jsonify({"success": False, "error": "No inbound data provided."}), 400
    try:
        port = int(data.get("port", 0))
    except (TypeError, ValueError):
        return jsonify({"success": False, "error": "'port' must be an integer."}), 400

    data["port"] = port
    data["enable"] = True
    data["tag"] = f"inbound-{port}"
    logger.info(f"Adding inbound on port {port} (protocol: {data.get('protocol')})")

    ok, message = add_inbound(session["token"], data)
    if not ok:
        return jsonify({"success": False, "error": message}), 502
    restart_flag.set_need_restart()
    return jsonify({"success": True, "message": "Inbound added."})


@inbounds_bp.route("/update/<inbound_id>", methods=["POST"])
@login_required
def update_inbound_api(inbound_id):
    parsed_id, error = _parse_id_or_400(inbound_id)
    if error:
        return error
    data = _inbound_payload()
    if not data:
        return jsonify({"success": False, "error": "No inbound data provided."}), 400
    data["id"] = parsed_id

    ok, message = update_inbound(session["token"], parsed_id, data)
    if not ok:
        status = 404 if message == INBOUND_NOT_FOUND else 502
        return jsonify({"success": False, "error": message}), status
    restart_flag.set_need_restart()
    return jsonify({"success": True, "message": "Inbound updated."})


@inbounds_bp.route("/del/<inbound_id>", methods=["POST"])
@login_required
def del_inbound_api(inbound_id):
    parsed_id, error = _parse_id_or_400(inbound_id)
    if error:
        return error

    ok, message = del_inbound(session["token"], parsed_id)
    if not ok:
        status = 404 if message == INBOUND_NOT_FOUND else 502
        return jsonify({"success": False, "error": message}), status
    restart_flag.set_need_restart()
    return jsonify({"success": True, "message": "Inbound deleted."})
