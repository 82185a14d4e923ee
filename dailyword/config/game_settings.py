"""
Game Configuration Constants Module

Default game parameters and word-list loading. The bundled words.json is only
read when the game service is built, using the configured word length and the
WORD_LIST_FILE setting when one is given.
"""

import json
import os
from typing import Dict, List, Final, Optional

from ..exceptions import ConfigurationError

WORD_LENGTH: Final[int] = 5
"""Number of letters in every word."""

MAX_GUESSES: Final[int] = 6
"""Maximum number of guess attempts allowed per game."""

HISTORY_CAP: Final[int] = 100
"""Number of completed games kept in the rolling history."""

WORD_LIST_FILE: Final[str] = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'words.json')
"""Bundled word list, used when no other file is configured."""


def load_word_list(path: Optional[str] = None, word_length: int = WORD_LENGTH) -> List[str]:
    """
    Load the word list from a JSON file.

    Args:
        path: JSON file containing an array of words (defaults to words.json)
        word_length: Required length of every word

    Returns:
        List[str]: Uppercase words in file order

    Raises:
        ConfigurationError: If the file is missing, malformed, empty or holds invalid words
    """
    json_file_path = path or WORD_LIST_FILE

    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            word_list = json.load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Word list file not found: {json_file_path}")
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {json_file_path}: {e}")

    if not isinstance(word_list, list):
        raise ConfigurationError("Word list file must contain an array of words")

    uppercase_words = [str(word).strip().upper() for word in word_list]
    validate_word_list_integrity(uppercase_words, word_length)
    return uppercase_words


def validate_word_list_integrity(words: List[str], word_length: int = WORD_LENGTH) -> bool:
    """
    Validates the integrity and consistency of a word list.

    Checks length, alphabetic characters, uppercase format and uniqueness.

    Returns:
        bool: True if the list passes all checks

    Raises:
        ConfigurationError: If any check fails, with a detailed message
    """
    if not words:
        raise ConfigurationError("Word list cannot be empty")

    for index, word in enumerate(words):
        if len(word) != word_length:
            raise ConfigurationError(
                f"Word at index {index} '{word}' is not {word_length} characters long"
            )

        if not word.isalpha():
            raise ConfigurationError(f"Word at index {index} '{word}' contains non-alphabetic characters")

        if not word.isupper():
            raise ConfigurationError(f"Word at index {index} '{word}' is not in uppercase format")

    if len(words) != len(set(words)):
        duplicates = sorted({word for word in words if words.count(word) > 1})
        raise ConfigurationError(f"Duplicate words found in word list: {duplicates}")

    return True


def get_word_statistics(words: List[str]) -> Dict:
    """
    Summarises a word list: size, average vowel count and letter frequency.
    """
    if not words:
        return {"error": "Word list is empty"}

    vowels = set('AEIOU')
    total_vowels = sum(len([char for char in word if char in vowels]) for word in words)

    letter_frequency = {}
    for word in words:
        for char in word:
            letter_frequency[char] = letter_frequency.get(char, 0) + 1

    return {
        "total_words": len(words),
        "avg_vowel_count": round(total_vowels / len(words), 2),
        "letter_frequency": letter_frequency,
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }

