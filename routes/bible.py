# routes/bible.py
from flask import Blueprint, jsonify, request
import logging

from services import get_services
from utils.books import BIBLE_BOOKS, book_index, find_book, next_chapter, previous_chapter
from utils.chapter_loader import ScriptureUnavailableError

bible_bp = Blueprint('bible', __name__)
logger = logging.getLogger(__name__)


def _chapter_ref(pair):
    if pair is None:
        return None
    book, chapter = pair
    return {"book": book.name, "chapter": chapter}


def _resolve_chapter(book_name, chapter):
    """Return (book, error_response) for a requested book/chapter pair."""
    book = find_book(book_name)
    if not book:
        return None, (jsonify({"error": f"Unknown book: {book_name}"}), 404)
    if chapter < 1 or chapter > book.chapters:
        return None, (jsonify({"error": f"{book.name} has {book.chapters} chapters"}), 404)
    return book, None


@bible_bp.route('/books', methods=['GET'])
def get_books():
    return jsonify([book.to_json() for book in BIBLE_BOOKS])


@bible_bp.route('/chapters/<book>/<int:chapter>', methods=['GET'])
def get_chapter(book, chapter):
    resolved, error = _resolve_chapter(book, chapter)
    if error:
        return error

    try:
        verses = get_services().chapter_loader.load(resolved, chapter)
    except ScriptureUnavailableError as e:
        logger.error(f"Failed to load {resolved.name} {chapter}: {e}")
        return jsonify({"error": "We could not connect to the scripture library.", "detail": str(e)}), 502
    except Exception as e:
        logger.error(f"Error in get_chapter: {str(e)}", exc_info=True)
        return jsonify({"error": str(e)}), 500

    idx = book_index(resolved)
    return jsonify({
        "book": resolved.name,
        "chapter": chapter,
        "verses": [verse.to_json() for verse in verses],
        "previous": _chapter_ref(previous_chapter(idx, chapter)),
        "next": _chapter_ref(next_chapter(idx, chapter))
    })


@bible_bp.route('/search', methods=['GET'])
def search_bible():
    query_str = request.args.get('q', '')
    if not query_str.strip():
        logger.warning("Search called with empty query")
        return jsonify([])

    try:
        results = get_services().thematic_search.search(query_str)
    except Exception as e:
        logger.error(f"Search error: {str(e)}", exc_info=True)
        return jsonify({'error': 'An error occurred during search.'}), 500

    return jsonify([
        dict(entry.model_dump(), navigable=find_book(entry.book) is not None)
        for entry in results
    ])


@bible_bp.route('/navigate', methods=['GET'])
def navigate():
    """Resolve a search result to a readable chapter reference."""
    book_name = request.args.get('book', '')
    chapter = request.args.get('chapter', type=int)
    if chapter is None:
        return jsonify({"error": "chapter must be an integer"}), 400

    resolved, error = _resolve_chapter(book_name, chapter)
    if error:
        logger.warning(f"Navigation to unrecognized reference: {book_name} {chapter}")
        return error
    return jsonify({"book": resolved.name, "chapter": chapter})


@bible_bp.route('/verse-context/<book>/<int:chapter>/<int:verse>', methods=['GET'])
def get_verse_context(book, chapter, verse):
    """Build the reference-plus-text string handed to the counselor."""
    resolved, error = _resolve_chapter(book, chapter)
    if error:
        return error

    try:
        verses = get_services().chapter_loader.load(resolved, chapter)
    except ScriptureUnavailableError as e:
        logger.error(f"Failed to load {resolved.name} {chapter} for verse context: {e}")
        return jsonify({"error": "We could not connect to the scripture library.", "detail": str(e)}), 502
    except Exception as e:
        logger.error(f"Error in get_verse_context: {str(e)}", exc_info=True)
        return jsonify({"error": str(e)}), 500

    match = next((v for v in verses if v.number == verse), None)
    if not match:
        return jsonify({"error": "Verse not found"}), 404

    return jsonify({
        "context_verse": f"{resolved.name} {chapter}:{verse} - {match.text}"
    })
