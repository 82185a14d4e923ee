"""
Daily Word Service

Resolves the secret for a date. Uses the remote daily word endpoint when one
is configured and the local date selector otherwise.
"""

from typing import Optional, Sequence, Tuple

import requests

from .word_selector import select_daily_word
from ..exceptions import ConfigurationError
from ..utils.game_logger import game_logger


class DailyWordService:
    """
    Returns (word, warning) for a date key. A warning is only produced when
    the remote endpoint fails and the fallback word is used instead.
    """

    def __init__(self,
                 word_list: Sequence[str],
                 fallback_word: str,
                 word_length: int,
                 remote_url: Optional[str] = None,
                 timeout: float = 5):
        fallback = (fallback_word or "").strip().upper()
        if len(fallback) != word_length or not fallback.isalpha():
            raise ConfigurationError(
                f"Fallback word '{fallback_word}' must be {word_length} letters"
            )

        self.word_list = word_list
        self.fallback_word = fallback
        self.word_length = word_length
        self.remote_url = remote_url
        self.timeout = timeout

    def get_daily_word(self, date_key: str) -> Tuple[str, Optional[str]]:
        if not self.remote_url:
            return select_daily_word(date_key, self.word_list), None

        try:
            return self._fetch_remote(date_key), None
        except (requests.RequestException, ValueError) as e:
            game_logger.logger.warning(f"Falling back to default word for {date_key}: {e}")
            return self.fallback_word, f"Could not fetch today's word: {e}"

    def _fetch_remote(self, date_key: str) -> str:
        response = requests.get(self.remote_url, params={'date': date_key}, timeout=self.timeout)
        response.raise_for_status()
        data = response.json()

        if not isinstance(data, dict) or not data.get('success') or not data.get('solution'):
            error = data.get('error') if isinstance(data, dict) else None
            raise ValueError(error or 'API returned error')

        solution = str(data['solution']).strip().upper()
        if len(solution) != self.word_length or not solution.isalpha():
            raise ValueError(f"API returned an invalid word '{solution}'")
        return solution
