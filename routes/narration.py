# routes/narration.py
from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError
import logging

from schemas.narration_schemas import NarrationRequest, ViewNarrationRequest
from services import get_services
from utils.narration import NarrationError, narrate_once, parse_voice

narration_bp = Blueprint('narration', __name__)
logger = logging.getLogger(__name__)


def narration_response(scope, text, voice=None):
    """Speak text for a single-flight scope and build the HTTP response."""
    try:
        voice = parse_voice(voice)
    except ValueError:
        return jsonify({"error": "voice must be 'female' or 'male'"}), 400

    services = get_services()
    try:
        audio = narrate_once(services.narration, services.narration_gate, scope, text, voice)
    except NarrationError as e:
        return jsonify({"error": "Narration failed", "detail": str(e)}), 502

    if audio is None:
        return jsonify({"status": "ignored", "scope": scope}), 409
    return Response(audio, mimetype='audio/mpeg')


def view_narration_response(view, text):
    """Narrate a fixed view; the single-flight scope is per client, e.g. "home:<client_id>"."""
    try:
        data = ViewNarrationRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({"error": "Invalid narration payload", "detail": str(e)}), 400
    return narration_response(f"{view}:{data.client_id}", text, data.voice)


@narration_bp.route('/', methods=['POST'])
def narrate():
    try:
        data = NarrationRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({"error": "Invalid narration payload", "detail": str(e)}), 400
    return narration_response(data.scope, data.text, data.voice)


@narration_bp.route('/<path:scope>', methods=['GET'])
def narration_state(scope):
    state = get_services().narration_gate.state(scope)
    return jsonify({"scope": scope, "state": state.value})
