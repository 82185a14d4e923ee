"""
Dictionary Service

Answers "is this a real word" and fetches definitions from a remote
dictionary API. Network problems never raise: they read as "not a word"
and "no meaning".
"""

from typing import Any, Iterable, List, Optional

import requests

from ..models.dictionary import MeaningEntry, WordMeaning
from ..utils.game_logger import game_logger


class DictionaryService:
    """
    Dictionary oracle backed by a dictionaryapi.dev style endpoint.

    Words in the fixed word list are always valid and never hit the network.
    """

    def __init__(self, api_url: str, word_list: Iterable[str] = (), timeout: float = 5):
        self.api_url = api_url
        self.known_words = {word.upper() for word in word_list}
        self.timeout = timeout

    def _lookup(self, word: str) -> Optional[Any]:
        url = self.api_url.format(word=word.lower())
        try:
            response = requests.get(url, timeout=self.timeout)
            if response.status_code != 200:
                return None
            return response.json()
        except (requests.RequestException, ValueError) as e:
            game_logger.logger.warning(f"Dictionary lookup failed for '{word}': {e}")
            return None

    def is_valid_word(self, word: str) -> bool:
        if word.upper() in self.known_words:
            return True
        data = self._lookup(word)
        return isinstance(data, list) and len(data) > 0

    def fetch_meaning(self, word: str) -> Optional[WordMeaning]:
        data = self._lookup(word)
        if not isinstance(data, list) or not data:
            return None
        try:
            return self._parse_entry(data[0], word)
        except (KeyError, TypeError, AttributeError, IndexError) as e:
            game_logger.logger.warning(f"Unexpected dictionary payload for '{word}': {e}")
            return None

    def _parse_entry(self, entry: dict, word: str) -> WordMeaning:
        phonetic = entry.get("phonetic")
        if not phonetic:
            phonetic = next(
                (p.get("text") for p in entry.get("phonetics", []) if p.get("text")), None
            )

        meanings: List[MeaningEntry] = []
        for meaning in entry.get("meanings", []):
            definitions = meaning.get("definitions") or []
            if not definitions:
                continue
            first = definitions[0]
            meanings.append(MeaningEntry(
                part_of_speech=meaning.get("partOfSpeech", ""),
                definition=first["definition"],
                example=first.get("example")
            ))

        return WordMeaning(word=entry.get("word", word.lower()), phonetic=phonetic, meanings=meanings)
