import os
import tempfile
from datetime import datetime, timezone

os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='dailyword-logs-'))

import pytest

from dailyword.models.dictionary import MeaningEntry, WordMeaning
from dailyword.services.daily_word_service import DailyWordService
from dailyword.services.game_service import GameService
from dailyword.services.session_manager import SessionManager
from dailyword.services.store import MemoryStore


class FakeDictionary:
    """In-memory dictionary oracle with a hook that runs mid-validation."""

    def __init__(self, words=(), meaning=None):
        self.words = {w.upper() for w in words}
        self.meaning = meaning
        self.calls = []
        self.during_check = None

    def is_valid_word(self, word):
        self.calls.append(word)
        if self.during_check is not None:
            hook, self.during_check = self.during_check, None
            hook(word)
        return word.upper() in self.words

    def fetch_meaning(self, word):
        return self.meaning


class FakeClock:
    def __init__(self, moment):
        self.moment = moment

    def __call__(self):
        return self.moment


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def dictionary():
    return FakeDictionary(
        ['CRANE', 'SLATE', 'LOLLY', 'ALLOW', 'ROBOT', 'TRAIN', 'PLANT', 'MOUSE', 'HOUSE', 'GUESS'],
        meaning=WordMeaning(
            word='crane', phonetic='/kreɪn/',
            meanings=[MeaningEntry('noun', 'A large, tall machine used for lifting.')]
        )
    )


@pytest.fixture
def daily_words():
    return DailyWordService(['CRANE'], 'REACT', 5)


@pytest.fixture
def make_manager(store, dictionary, daily_words):
    def factory(player_id='p1', **kwargs):
        return SessionManager(player_id, store, dictionary, daily_words, **kwargs)
    return factory


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def game_service(store, dictionary, daily_words, clock):
    return GameService(store, dictionary, daily_words, ['CRANE', 'SLATE', 'PLANT'], clock=clock)
