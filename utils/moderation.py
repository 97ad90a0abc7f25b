"""Word filter applied to chirp bodies before they are stored."""
from __future__ import annotations

from typing import Iterable

PROFANE_WORDS = ("kerfuffle", "sharbert", "fornax")
REPLACEMENT = "****"


def censor(body: str, words: Iterable[str] = PROFANE_WORDS) -> str:
    """
    Replace whole words (case-insensitive) with ****.
    Words glued to punctuation ("Sharbert!") are left alone.
    """
    banned = {w.lower() for w in words}
    return " ".join(REPLACEMENT if word.lower() in banned else word for word in body.split(" "))
