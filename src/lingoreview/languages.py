"""Display names for language codes and part-of-speech tags."""

from __future__ import annotations

LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "zh": "Mandarin",
    "es": "Spanish",
    "fr": "French",
    "ja": "Japanese",
    "de": "German",
    "ru": "Russian",
    "it": "Italian",
    "pt": "Portuguese",
    "ko": "Korean",
}

# Universal POS tags
POS_DESCRIPTIONS: dict[str, str] = {
    "NOUN": "Noun",
    "VERB": "Verb",
    "ADJ": "Adjective",
    "ADV": "Adverb",
    "ADP": "Preposition",
    "CONJ": "Conjunction",
    "DET": "Determiner",
    "PRON": "Pronoun",
    "PROPN": "Proper noun",
    "NUM": "Number",
    "PART": "Particle",
    "INTJ": "Interjection",
    "PUNCT": "Punctuation",
    "SYM": "Symbol",
    "X": "Other",
}


def language_name(code: str | None) -> str:
    """Return the display name for a language code.

    Unknown codes are returned unchanged; a missing code is ``Unknown``.
    """
    if not code:
        return "Unknown"
    return LANGUAGE_NAMES.get(code, code)


def pos_description(tag: str | None) -> str:
    """Return a readable part-of-speech name, or the tag itself."""
    if not tag:
        return ""
    return POS_DESCRIPTIONS.get(tag, tag)
