"""Text canonicalization applied to every post before tokenization.

Strips community-board noise (app signatures, laughter jamo, divider
characters), then keeps only Hangul, ASCII letters/digits and a few
punctuation marks the vocabulary knows about.
"""

import re

# Replaced with a single space, in this order
NOISE_SUBSTRINGS = (
    "- dc official App",   # mobile app signature
    "ㅋ",                   # laughter filler
    "\n",
    "ㅡ",                   # horizontal-bar filler
)

# Hangul syllables, compatibility jamo (consonants + vowels), ASCII alnum, - % ? .
_DISALLOWED_CHARS = re.compile(r"[^가-힣ㄱ-ㅎㅏ-ㅣa-zA-Z0-9\-%?.]")


def _canonicalize_once(text: str) -> str:
    for noise in NOISE_SUBSTRINGS:
        text = text.replace(noise, " ")
    text = _DISALLOWED_CHARS.sub(" ", text)
    return " ".join(word for word in text.split(" ") if word)


def canonicalize(raw: str) -> str:
    """Normalize a raw post into canonical form.

    Steps:
    1. Replace noise substrings and newlines with a space.
    2. Replace every character outside the allowed set with a space.
    3. Collapse whitespace runs into single spaces (no leading/trailing).

    The character filter can re-form the app signature (e.g. "-@dc official App"),
    so the steps repeat until the text stops changing. Each extra pass
    strictly shortens the text.

    Args:
        raw: Post text as read from the source table. None is treated as "".

    Returns:
        Canonical text, possibly empty.
    """
    text = raw or ""
    while True:
        cleaned = _canonicalize_once(text)
        if cleaned == text:
            return cleaned
        text = cleaned
