import pytest

from dailyword import create_app
from dailyword.config.app_config import TestingConfig
from dailyword.config.game_settings import load_word_list
from dailyword.services.store import MemoryStore
from dailyword.services.word_selector import select_daily_word

from .conftest import FakeDictionary

WORD_LIST = load_word_list()


@pytest.fixture
def app_and_socketio():
    return create_app(TestingConfig, store=MemoryStore(), dictionary=FakeDictionary(WORD_LIST))


@pytest.fixture
def app(app_and_socketio):
    return app_and_socketio[0]


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def token(client):
    response = client.post('/api/player')
    assert response.status_code == 201
    return response.get_json()['token']


@pytest.fixture
def auth(token):
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def secret(app):
    service = app.extensions['game_service']
    return select_daily_word(service.today(), service.word_list)


@pytest.fixture
def wrong_word(secret):
    return next(word for word in WORD_LIST if word != secret)


def test_endpoints_require_a_player_token(client):
    assert client.post('/api/daily/start').status_code == 401
    response = client.get('/api/stats', headers={'Authorization': 'Bearer nonsense'})
    assert response.status_code == 401
    assert response.get_json() == {'success': False, 'error': 'Invalid token'}


def test_player_token_verifies(client, token, auth):
    response = client.get('/api/player', headers=auth)
    assert response.status_code == 200
    assert response.get_json()['player']['id']


def test_daily_start_hides_answer(client, auth):
    response = client.post('/api/daily/start', headers=auth)
    state = response.get_json()['state']
    assert response.status_code == 200
    assert state['status'] == 'PLAYING'
    assert state['answer'] is None
    assert state['mode'] == 'daily'


def test_daily_game_flow(client, auth, secret, wrong_word):
    client.post('/api/daily/start', headers=auth)

    response = client.post('/api/daily/guess', json={'guess': wrong_word.lower()}, headers=auth)
    assert response.status_code == 200
    assert response.get_json()['state']['current_round'] == 1

    response = client.post('/api/daily/guess', json={'guess': secret}, headers=auth)
    state = response.get_json()['state']
    assert state['status'] == 'WON'
    assert state['answer'] == secret

    response = client.post('/api/daily/guess', json={'guess': secret}, headers=auth)
    assert response.status_code == 400
    assert response.get_json()['error_type'] == 'GameOverError'

    stats = client.get('/api/stats', headers=auth).get_json()
    assert stats['streak']['current_streak'] == 1
    assert stats['summary']['win_rate_percent'] == 100
    assert stats['histogram']['attempt2'] == 1


def test_reload_resumes_daily_game(client, auth, wrong_word):
    client.post('/api/daily/start', headers=auth)
    client.post('/api/daily/guess', json={'guess': wrong_word}, headers=auth)

    response = client.get('/api/daily/state', headers=auth)
    assert response.get_json()['state']['guesses'][0]['word'] == wrong_word


def test_invalid_guesses_are_reported(client, auth):
    client.post('/api/daily/start', headers=auth)

    response = client.post('/api/daily/guess', json={'guess': 'ABC'}, headers=auth)
    assert response.status_code == 400
    assert response.get_json()['error_type'] == 'WrongLengthError'

    response = client.post('/api/daily/guess', json={'guess': 'QXZVW'}, headers=auth)
    assert response.status_code == 400
    assert response.get_json()['error_type'] == 'NotAWordError'

    response = client.post('/api/daily/guess', json={}, headers=auth)
    assert response.status_code == 400

    state = client.get('/api/daily/state', headers=auth).get_json()['state']
    assert state['current_round'] == 0


def test_practice_flow_and_reset(client, auth):
    response = client.post('/api/practice/start', json={'word': 'robot'}, headers=auth)
    assert response.status_code == 201
    assert response.get_json()['state']['mode'] == 'practice'

    response = client.post('/api/practice/guess', json={'guess': 'ROBOT'}, headers=auth)
    assert response.get_json()['state']['status'] == 'WON'

    response = client.post('/api/practice/reset', headers=auth)
    state = response.get_json()['state']
    assert state['status'] == 'PLAYING'
    assert state['guesses'] == []

    stats = client.get('/api/stats', headers=auth).get_json()
    assert stats['streak']['current_streak'] == 0
    assert stats['summary']['total_games'] == 1


def test_practice_custom_word_is_validated(client, auth):
    response = client.post('/api/practice/start', json={'word': 'toolong'}, headers=auth)
    assert response.status_code == 400
    response = client.post('/api/practice/start', json={'word': 5}, headers=auth)
    assert response.status_code == 400


def test_reset_without_practice_game(client, auth):
    response = client.post('/api/practice/reset', headers=auth)
    assert response.status_code == 400
    assert response.get_json()['error_type'] == 'SessionNotStartedError'


def test_meaning_after_game(client, auth, secret):
    client.post('/api/daily/start', headers=auth)
    assert client.get('/api/meaning', headers=auth).status_code == 400

    client.post('/api/daily/guess', json={'guess': secret}, headers=auth)
    response = client.get('/api/meaning?mode=daily', headers=auth)
    assert response.status_code == 200
    assert response.get_json() == {'success': True, 'meaning': None}

    assert client.get('/api/meaning?mode=other', headers=auth).status_code == 400


def test_health(client):
    response = client.get('/api/health')
    data = response.get_json()
    assert response.status_code == 200
    assert data['status'] == 'healthy'
    assert data['total_words'] == len(WORD_LIST)


def test_socket_client_receives_completion_events(app_and_socketio, client, token, auth, secret):
    app, socketio = app_and_socketio
    socket_client = socketio.test_client(app)
    socket_client.emit('join_player', {'token': token})
    assert socket_client.get_received()[0]['name'] == 'player_joined'

    client.post('/api/daily/start', headers=auth)
    client.post('/api/daily/guess', json={'guess': secret}, headers=auth)

    names = [event['name'] for event in socket_client.get_received()]
    assert names == ['session_completed', 'streak_updated', 'stats_updated']


def test_socket_join_requires_token(app_and_socketio):
    app, socketio = app_and_socketio
    socket_client = socketio.test_client(app)
    socket_client.emit('join_player', {})
    received = socket_client.get_received()
    assert received[0]['name'] == 'error'
