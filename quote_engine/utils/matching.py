"""
Case-insensitive substring matching for operator and product names.

Accents are significant: 'fênix' does not match 'Fenix'. Tables that need
both spellings list both.
"""


def contains_keyword(text: str, keyword: str) -> bool:
    """True if keyword occurs anywhere in text, ignoring case."""
    if not text:
        return False
    return keyword.casefold() in text.casefold()
