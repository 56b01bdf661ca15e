"""Unit tests for chirp body moderation."""

import pytest

from chirpy.services.moderation import clean_chirp_body


@pytest.mark.parametrize(
    "body,expected",
    [
        (
            "I had something interesting for breakfast",
            "I had something interesting for breakfast",
        ),
        (
            "I hear Mastodon is better than Chirpy. sharbert I need to migrate",
            "I hear Mastodon is better than Chirpy. **** I need to migrate",
        ),
        (
            "I really need a kerfuffle to go to bed sooner, Fornax !",
            "I really need a **** to go to bed sooner, **** !",
        ),
        ("Sharbert!", "Sharbert!"),
        ("KERFUFFLE", "****"),
        ("", ""),
    ],
)
def test_clean_chirp_body(body, expected):
    """Profane words are masked whole, case-insensitively, punctuation included."""
    assert clean_chirp_body(body) == expected


def test_spacing_preserved():
    assert clean_chirp_body("a  fornax  b") == "a  ****  b"
