# routes/home.py
from flask import Blueprint, jsonify
import logging

from routes.narration import view_narration_response
from services import get_services
from utils.phrases import phrases_for

home_bp = Blueprint('home', __name__)
logger = logging.getLogger(__name__)

NARRATION_VIEW = 'home'

VERSE_OF_THE_DAY = {
    "reference": "Jeremias 29:11",
    "book": "Jeremias",
    "chapter": 29,
    "verse": 11,
    "text": ("Pois eu bem sei os planos que tenho para vocês, diz o Senhor, planos de "
             "fazê-los prosperar e não de causar dano, planos de dar a vocês esperança "
             "e um futuro.")
}


def verse_of_the_day_narration(language=None):
    return phrases_for(language)['verse_narration'].format(**VERSE_OF_THE_DAY)


@home_bp.route('/', methods=['GET'])
def get_home():
    recent = get_services().chapter_loader.recent_readings()
    return jsonify({
        "verse_of_the_day": VERSE_OF_THE_DAY,
        "recent_readings": [{"book": key.book, "chapter": key.chapter} for key in recent]
    })


@home_bp.route('/narration', methods=['POST'])
def narrate_verse_of_the_day():
    return view_narration_response(NARRATION_VIEW, verse_of_the_day_narration())
