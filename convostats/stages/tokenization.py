"""
Tokenizer.

Segments joined message text into lowercase word tokens.
"""

import logging
import unicodedata
from typing import Iterable, List

import regex

logger = logging.getLogger(__name__)

# A letter or digit followed by letters, combining marks and digits.
# Marks stay attached to their base letter (Devanagari vowel signs, NFD accents).
WORD_PATTERN = regex.compile(r"[\p{L}\p{N}][\p{L}\p{M}\p{N}]*")


def join_messages(messages: Iterable[str]) -> str:
    """Concatenate message texts with single spaces."""
    return " ".join(messages)


def tokenize(text: str) -> List[str]:
    """
    Split text into lowercase word tokens.

    Text is NFC-normalized first, so precomposed and decomposed spellings
    of a word yield the same token. Punctuation, whitespace, apostrophes
    and underscores are boundaries and never produce tokens, so "Don't"
    yields ["don", "t"].

    Args:
        text: Joined message text

    Returns:
        Tokens in text order (empty for empty text)
    """
    if not text:
        return []

    normalized = unicodedata.normalize("NFC", text).lower()
    tokens = WORD_PATTERN.findall(normalized)
    logger.debug(f"Tokenized {len(text)} characters into {len(tokens)} tokens")
    return tokens
