# utils/books.py
"""Static reference table of the canonical books.

Display names are localized; ``api_name`` is what the scripture service
expects in its reference path.
"""
from typing import List, Optional, Sequence

from models import Book

BIBLE_BOOKS: List[Book] = [
    Book('Gênesis', 'Genesis', 50),
    Book('Êxodo', 'Exodus', 40),
    Book('Levítico', 'Leviticus', 27),
    Book('Números', 'Numbers', 36),
    Book('Deuteronômio', 'Deuteronomy', 34),
    Book('Josué', 'Joshua', 24),
    Book('Juízes', 'Judges', 21),
    Book('Rute', 'Ruth', 4),
    Book('1 Samuel', '1 Samuel', 31),
    Book('2 Samuel', '2 Samuel', 24),
    Book('1 Reis', '1 Kings', 22),
    Book('2 Reis', '2 Kings', 25),
    Book('1 Crônicas', '1 Chronicles', 29),
    Book('2 Crônicas', '2 Chronicles', 36),
    Book('Esdras', 'Ezra', 10),
    Book('Neemias', 'Nehemiah', 13),
    Book('Ester', 'Esther', 10),
    Book('Jó', 'Job', 42),
    Book('Salmos', 'Psalms', 150),
    Book('Provérbios', 'Proverbs', 31),
    Book('Eclesiastes', 'Ecclesiastes', 12),
    Book('Cânticos', 'Song of Solomon', 8),
    Book('Isaías', 'Isaiah', 66),
    Book('Jeremias', 'Jeremiah', 52),
    Book('Lamentações', 'Lamentations', 5),
    Book('Ezequiel', 'Ezekiel', 48),
    Book('Daniel', 'Daniel', 12),
    Book('Oseias', 'Hosea', 14),
    Book('Joel', 'Joel', 3),
    Book('Amós', 'Amos', 9),
    Book('Obadias', 'Obadiah', 1),
    Book('Jonas', 'Jonah', 4),
    Book('Miqueias', 'Micah', 7),
    Book('Naum', 'Nahum', 3),
    Book('Habacuque', 'Habakkuk', 3),
    Book('Sofonias', 'Zephaniah', 3),
    Book('Ageu', 'Haggai', 2),
    Book('Zacarias', 'Zechariah', 14),
    Book('Malaquias', 'Malachi', 4),
    Book('Mateus', 'Matthew', 28),
    Book('Marcos', 'Mark', 16),
    Book('Lucas', 'Luke', 24),
    Book('João', 'John', 21),
    Book('Atos', 'Acts', 28),
    Book('Romanos', 'Romans', 16),
    Book('1 Coríntios', '1 Corinthians', 16),
    Book('2 Coríntios', '2 Corinthians', 13),
    Book('Gálatas', 'Galatians', 6),
    Book('Efésios', 'Ephesians', 6),
    Book('Filipenses', 'Philippians', 4),
    Book('Colossenses', 'Colossians', 4),
    Book('1 Tessalonicenses', '1 Thessalonians', 5),
    Book('2 Tessalonicenses', '2 Thessalonians', 3),
    Book('1 Timóteo', '1 Timothy', 6),
    Book('2 Timóteo', '2 Timothy', 4),
    Book('Tito', 'Titus', 3),
    Book('Filemom', 'Philemon', 1),
    Book('Hebreus', 'Hebrews', 13),
    Book('Tiago', 'James', 5),
    Book('1 Pedro', '1 Peter', 5),
    Book('2 Pedro', '2 Peter', 3),
    Book('1 João', '1 John', 5),
    Book('2 João', '2 John', 1),
    Book('3 João', '3 John', 1),
    Book('Judas', 'Jude', 1),
    Book('Apocalipse', 'Revelation', 22),
]


def find_book(name: str, books: Sequence[Book] = BIBLE_BOOKS) -> Optional[Book]:
    """Case-insensitive lookup by display name or external reference name."""
    if not name:
        return None
    wanted = name.strip().lower()
    for book in books:
        if book.name.lower() == wanted or book.api_name.lower() == wanted:
            return book
    return None


def book_index(book: Book, books: Sequence[Book] = BIBLE_BOOKS) -> int:
    for idx, candidate in enumerate(books):
        if candidate.name == book.name:
            return idx
    raise ValueError(f"Book not in reference table: {book.name}")


def next_chapter(book_idx: int, chapter: int, books: Sequence[Book] = BIBLE_BOOKS):
    """Return the (book, chapter) that follows, or None at the end of the corpus."""
    book = books[book_idx]
    if chapter + 1 <= book.chapters:
        return book, chapter + 1
    if book_idx + 1 < len(books):
        return books[book_idx + 1], 1
    return None


def previous_chapter(book_idx: int, chapter: int, books: Sequence[Book] = BIBLE_BOOKS):
    """Return the (book, chapter) that precedes, or None at the start of the corpus."""
    if chapter > 1:
        return books[book_idx], chapter - 1
    if book_idx > 0:
        prev_book = books[book_idx - 1]
        return prev_book, prev_book.chapters
    return None
