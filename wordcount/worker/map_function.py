"""
Word count map function.
Turns one record into (word, 1) pairs.
"""

import string
from typing import List, Tuple

# ASCII punctuation, the same set C's ispunct() reports in the "C" locale
_STRIP_PUNCTUATION = str.maketrans('', '', string.punctuation)


def normalize(token: str) -> str:
    """Remove punctuation characters from a token and lowercase it."""
    return token.translate(_STRIP_PUNCTUATION).lower()


def tokenize(record: str, keep_empty_tokens: bool = False) -> List[str]:
    """
    Split a record on whitespace and normalize each token.

    Tokens made only of punctuation normalize to "" and are dropped unless
    keep_empty_tokens is set.

    Args:
        record: Input text
        keep_empty_tokens: Keep "" for punctuation-only tokens

    Returns:
        Normalized words in their original order
    """
    words = []
    for token in record.split():
        word = normalize(token)
        if word or keep_empty_tokens:
            words.append(word)
    return words


def map_function(record: str, keep_empty_tokens: bool = False) -> List[Tuple[str, int]]:
    """
    Map function: emit (word, 1) for each word in the record.

    Args:
        record: Input text
        keep_empty_tokens: Emit ("", 1) for punctuation-only tokens

    Returns:
        List of (word, 1) tuples in original word order
    """
    return [(word, 1) for word in tokenize(record, keep_empty_tokens)]
