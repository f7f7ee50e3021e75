"""Word supply for new boards."""

from .curated import (
    WORD_BANK,
    get_all_words,
    get_balanced_words,
    get_random_words,
    get_words_by_category,
    validate_word_list,
)
from .generator import CuratedWordSource, WordGenerator, WordSource, parse_word_list

__all__ = [
    "WORD_BANK",
    "get_all_words",
    "get_balanced_words",
    "get_random_words",
    "get_words_by_category",
    "validate_word_list",
    "CuratedWordSource",
    "WordGenerator",
    "WordSource",
    "parse_word_list",
]
