import pytest
import requests

from dailyword.services.dictionary_service import DictionaryService

API = "https://dictionary.test/api/{word}"

CRANE_PAYLOAD = [{
    "word": "crane",
    "phonetics": [{"audio": ""}, {"text": "/kɹeɪn/"}],
    "meanings": [
        {"partOfSpeech": "noun", "definition": "ignored",
         "definitions": [{"definition": "A large wading bird.", "example": "A crane stood in the marsh."}]},
        {"partOfSpeech": "verb", "definitions": [{"definition": "To extend one's neck."}]},
        {"partOfSpeech": "adjective", "definitions": []},
    ]
}]


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


@pytest.fixture
def responses(monkeypatch):
    calls = []
    replies = {}

    def fake_get(url, timeout=None, **kwargs):
        calls.append(url)
        reply = replies.get(url)
        if isinstance(reply, Exception):
            raise reply
        return reply or FakeResponse(404, {"title": "No Definitions Found"})

    monkeypatch.setattr(requests, "get", fake_get)
    return calls, replies


def test_word_list_words_are_valid_without_network(responses):
    calls, _ = responses
    service = DictionaryService(API, ["CRANE"])
    assert service.is_valid_word("CRANE")
    assert calls == []


def test_remote_lookup_accepts_known_word(responses):
    calls, replies = responses
    replies[API.format(word="crane")] = FakeResponse(200, CRANE_PAYLOAD)
    assert DictionaryService(API).is_valid_word("CRANE")
    assert calls == ["https://dictionary.test/api/crane"]


def test_not_found_is_invalid(responses):
    assert not DictionaryService(API).is_valid_word("QXZVW")


def test_network_error_is_invalid(responses):
    _, replies = responses
    replies[API.format(word="crane")] = requests.ConnectionError("offline")
    assert not DictionaryService(API).is_valid_word("CRANE")


def test_bad_json_is_invalid(responses):
    _, replies = responses
    replies[API.format(word="crane")] = FakeResponse(200, ValueError("not json"))
    assert not DictionaryService(API).is_valid_word("CRANE")


def test_fetch_meaning_parses_payload(responses):
    _, replies = responses
    replies[API.format(word="crane")] = FakeResponse(200, CRANE_PAYLOAD)

    meaning = DictionaryService(API).fetch_meaning("CRANE")

    assert meaning.word == "crane"
    assert meaning.phonetic == "/kɹeɪn/"
    assert [m.part_of_speech for m in meaning.meanings] == ["noun", "verb"]
    assert meaning.meanings[0].example == "A crane stood in the marsh."
    assert meaning.meanings[1].example is None


def test_fetch_meaning_failure_is_none(responses):
    _, replies = responses
    replies[API.format(word="crane")] = requests.Timeout("slow")
    assert DictionaryService(API).fetch_meaning("CRANE") is None


def test_fetch_meaning_unexpected_shape_is_none(responses):
    _, replies = responses
    replies[API.format(word="crane")] = FakeResponse(200, [{"meanings": [{"definitions": [{}]}]}])
    assert DictionaryService(API).fetch_meaning("CRANE") is None
