# routes/devotional.py
from flask import Blueprint, jsonify
import logging

from routes.narration import view_narration_response
from services import get_services
from utils.devotional import DevotionalGenerationError

devotional_bp = Blueprint('devotional', __name__)
logger = logging.getLogger(__name__)

NARRATION_VIEW = 'devotional'


def _payload(generator):
    record = generator.current
    return {
        "state": generator.state.value,
        "devotional": record.model_dump() if record else None
    }


@devotional_bp.route('/', methods=['GET'])
def get_devotional():
    generator = get_services().devotional
    try:
        generator.get_or_generate()
    except DevotionalGenerationError as e:
        return jsonify({"error": "Could not generate a devotional", "detail": str(e), **_payload(generator)}), 502
    return jsonify(_payload(generator))


@devotional_bp.route('/regenerate', methods=['POST'])
def regenerate_devotional():
    generator = get_services().devotional
    try:
        generator.generate()
    except DevotionalGenerationError as e:
        # prior record, if any, is still current
        return jsonify({"error": "Could not generate a devotional", "detail": str(e), **_payload(generator)}), 502
    return jsonify(_payload(generator))


@devotional_bp.route('/narration', methods=['POST'])
def narrate_devotional():
    generator = get_services().devotional
    record = generator.current
    if record is None:
        return jsonify({"error": "No devotional to narrate"}), 404
    return view_narration_response(NARRATION_VIEW, record.narration_text(generator.language))
