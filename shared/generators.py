"""
Random code and token generators — pure, side-effect-free functions.

All generators use cryptographically secure sources (``secrets`` module).
"""

from __future__ import annotations

import secrets
import string

from shared.wordlist import WORDS

PIN_TOKEN_LENGTH = 10
DICEWARE_WORD_COUNT = 4


def generate_token(length: int = 32) -> str:
    """Generate a cryptographically secure URL-safe random token.

    Used for magic links and password reset links.

    Args:
        length: Number of random bytes before base64 encoding (default 32).
            The resulting string will be longer than *length* characters.
    """
    return secrets.token_urlsafe(length)


def generate_pin_token(length: int = PIN_TOKEN_LENGTH) -> str:
    """Generate a numeric code short enough to be typed back from an email."""
    return "".join(secrets.choice(string.digits) for _ in range(length))


def generate_diceware_password(
    word_count: int = DICEWARE_WORD_COUNT, separator: str = "-"
) -> str:
    """Generate a passphrase of *word_count* random words, e.g. ``"lune-piano-sable-orage"``."""
    return separator.join(secrets.choice(WORDS) for _ in range(word_count))
