# routes/counselor.py
from flask import Blueprint, jsonify, request
from pydantic import ValidationError
import logging

from schemas.counselor_schemas import MessageCreate
from services import get_services

counselor_bp = Blueprint('counselor', __name__)
logger = logging.getLogger(__name__)


def _session_or_404(session_id):
    session = get_services().conversations.get(session_id)
    if session is None:
        return None, (jsonify({"error": "Session not found"}), 404)
    return session, None


@counselor_bp.route('/sessions', methods=['POST'])
def create_session():
    session = get_services().conversations.create()
    return jsonify(session.to_json()), 201


@counselor_bp.route('/sessions/<session_id>', methods=['GET'])
def get_session(session_id):
    session, error = _session_or_404(session_id)
    if error:
        return error
    return jsonify(session.to_json())


@counselor_bp.route('/sessions/<session_id>/messages', methods=['POST'])
def send_message(session_id):
    session, error = _session_or_404(session_id)
    if error:
        return error

    try:
        data = MessageCreate.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({"error": "Invalid message payload", "detail": str(e)}), 400

    if data.context_verse and data.context_verse.strip():
        accepted = session.analyze_verse(data.context_verse.strip())
    else:
        accepted = session.send(data.content or '')

    if not accepted:
        return jsonify({"status": "ignored", **session.to_json()}), 409
    return jsonify(session.to_json())


@counselor_bp.route('/sessions/<session_id>', methods=['DELETE'])
def reset_session(session_id):
    if not get_services().conversations.reset(session_id):
        return jsonify({"error": "Session not found"}), 404
    return jsonify({"message": "Session reset successfully"})
