"""Slug generation for catalog documents.

Turns free-text product names (Russian or Latin) into stable,
URL-safe identifiers:

    >>> slugify("Стикер №1")
    'stiker-1'
    >>> slugify("Дождь")
    'dozhd'
"""

import re

__all__ = ["TRANSLIT_MAP", "slugify", "transliterate", "transliterate_char"]


# Lowercase Russian alphabet only; input is case-folded before lookup.
TRANSLIT_MAP: dict[str, str] = {
    "а": "a",
    "б": "b",
    "в": "v",
    "г": "g",
    "д": "d",
    "е": "e",
    "ё": "e",
    "ж": "zh",
    "з": "z",
    "и": "i",
    "й": "y",
    "к": "k",
    "л": "l",
    "м": "m",
    "н": "n",
    "о": "o",
    "п": "p",
    "р": "r",
    "с": "s",
    "т": "t",
    "у": "u",
    "ф": "f",
    "х": "h",
    "ц": "c",
    "ч": "ch",
    "ш": "sh",
    "щ": "shch",
    "ы": "y",
    "э": "e",
    "ю": "yu",
    "я": "ya",
    "ь": "",
    "ъ": "",
}

_NON_SLUG_RUN = re.compile(r"[^a-z0-9]+")
_HYPHEN_RUN = re.compile(r"-+")


def transliterate_char(char: str) -> str:
    """Return the Latin transcription of ``char`` or ``char`` itself."""
    return TRANSLIT_MAP.get(char, char)


def transliterate(text: str) -> str:
    """Transliterate every character of ``text``."""
    return "".join(transliterate_char(char) for char in text)


def slugify(value: str) -> str:
    """Build a URL-safe slug from a display name.

    The result only contains ``[a-z0-9-]``, never starts or ends with a
    hyphen and never holds two hyphens in a row. It can be empty when the
    input has no letters or digits. ``slugify(slugify(s)) == slugify(s)``.

    Args:
        value: Free text, usually a product name.

    Returns:
        Slug string (possibly empty).
    """
    text = transliterate(str(value).lower().strip())
    text = _NON_SLUG_RUN.sub("-", text)
    text = _HYPHEN_RUN.sub("-", text)
    if text.startswith("-"):
        text = text[1:]
    if text.endswith("-"):
        text = text[:-1]
    return text
