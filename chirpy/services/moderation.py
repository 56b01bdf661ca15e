"""Chirp body moderation."""

PROFANE_WORDS = frozenset({"kerfuffle", "sharbert", "fornax"})
MASK = "****"


def clean_chirp_body(body: str) -> str:
    """Mask profane words.

    Words are split on single spaces and compared case-insensitively; a word
    with attached punctuation (``fornax!``) does not match.
    """
    return " ".join(MASK if word.lower() in PROFANE_WORDS else word for word in body.split(" "))
