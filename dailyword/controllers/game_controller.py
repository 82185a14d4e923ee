"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from dataclasses import asdict
from flask import Blueprint, request, jsonify
from ..config.game_settings import get_word_statistics
from ..exceptions import GameInputError
from ..services.game_service import get_game_service
from ..utils.decorators import require_player
from ..utils.game_logger import game_logger
from ..utils.helpers import error_response, get_guess_from_request

game_bp = Blueprint('game', __name__)

PUZZLE_CHANGED_MESSAGE = 'The puzzle changed before your guess was checked'


def _state_response(action, state, mode, status=200, **log_details):
    response_data = {
        'success': True,
        'state': asdict(state)
    }
    game_logger.log_server_response(request, action, True, response_data, mode, **log_details)
    return jsonify(response_data), status


def _handle(action, mode, call):
    """
    Runs a game service call and maps errors onto the JSON envelope.

    Input errors are the player's to fix (400); everything else is logged as
    a server error (500).
    """
    game_service = get_game_service()
    if not game_service:
        return error_response('Game service unavailable', 500)

    try:
        return call(game_service)
    except GameInputError as e:
        response = {'success': False, 'error': e.message, 'error_type': type(e).__name__}
        game_logger.log_server_response(request, action, False, response, mode)
        return jsonify(response), 400
    except Exception as e:
        game_logger.log_error(request, e, action, mode)
        response = {'success': False, 'error': str(e)}
        game_logger.log_server_response(request, action, False, response, mode)
        return jsonify(response), 500


def _submit(action, mode, submit):
    guess = get_guess_from_request()
    if guess is None:
        response = {'success': False, 'error': 'Guess is required'}
        game_logger.log_server_response(request, action, False, response, mode)
        return jsonify(response), 400

    game_logger.log_user_action(request, action, mode, guess_length=len(guess))

    def call(game_service):
        player_id = request.player['id']
        state = submit(game_service, player_id, guess)
        if state is None:
            current = (game_service.get_daily_state(player_id) if mode == 'daily'
                       else game_service.get_practice_state(player_id))
            response = {
                'success': False,
                'error': PUZZLE_CHANGED_MESSAGE,
                'state': asdict(current)
            }
            game_logger.log_server_response(request, action, False, response, mode)
            return jsonify(response), 409
        return _state_response(action, state, mode, round=state.current_round, status_after=state.status)

    return _handle(action, mode, call)


# ----------------------------------------------------------------------
# Daily puzzle
# ----------------------------------------------------------------------

@game_bp.route('/daily/start', methods=['POST'])
@require_player
def start_daily():
    """Start or resume today's puzzle."""
    game_logger.log_user_action(request, 'start_daily', 'daily')
    return _handle('start_daily', 'daily', lambda service: _state_response(
        'start_daily', service.start_daily(request.player['id']), 'daily'
    ))


@game_bp.route('/daily/state', methods=['GET'])
@require_player
def get_daily_state():
    """Get today's puzzle state."""
    game_logger.log_user_action(request, 'get_daily_state', 'daily')
    return _handle('get_daily_state', 'daily', lambda service: _state_response(
        'get_daily_state', service.get_daily_state(request.player['id']), 'daily'
    ))


@game_bp.route('/daily/guess', methods=['POST'])
@require_player
def submit_daily_guess():
    """Submit a guess for today's puzzle."""
    return _submit('submit_guess', 'daily',
                   lambda service, player_id, guess: service.submit_daily_guess(player_id, guess))


# ----------------------------------------------------------------------
# Practice puzzle
# ----------------------------------------------------------------------

@game_bp.route('/practice/start', methods=['POST'])
@require_player
def start_practice():
    """Start a practice puzzle with a custom or random word."""
    data = request.get_json(silent=True) or {}
    word = data.get('word')
    if word is not None and not isinstance(word, str):
        return error_response('Word must be a string', 400)

    game_logger.log_user_action(request, 'start_practice', 'practice', custom_word=bool(word))
    return _handle('start_practice', 'practice', lambda service: _state_response(
        'start_practice', service.start_practice(request.player['id'], word), 'practice', status=201
    ))


@game_bp.route('/practice/state', methods=['GET'])
@require_player
def get_practice_state():
    """Get the current practice puzzle state."""
    game_logger.log_user_action(request, 'get_practice_state', 'practice')
    return _handle('get_practice_state', 'practice', lambda service: _state_response(
        'get_practice_state', service.get_practice_state(request.player['id']), 'practice'
    ))


@game_bp.route('/practice/guess', methods=['POST'])
@require_player
def submit_practice_guess():
    """Submit a guess for the practice puzzle."""
    return _submit('submit_guess', 'practice',
                   lambda service, player_id, guess: service.submit_practice_guess(player_id, guess))


@game_bp.route('/practice/reset', methods=['POST'])
@require_player
def reset_practice():
    """Replay the practice puzzle from the start with the same word."""
    game_logger.log_user_action(request, 'reset_practice', 'practice')
    return _handle('reset_practice', 'practice', lambda service: _state_response(
        'reset_practice', service.reset_practice(request.player['id']), 'practice'
    ))


# ----------------------------------------------------------------------
# Meaning, statistics, health
# ----------------------------------------------------------------------

@game_bp.route('/meaning', methods=['GET'])
@require_player
def get_meaning():
    """Definition of a finished puzzle's word."""
    mode = request.args.get('mode', 'daily')
    if mode not in ('daily', 'practice'):
        return error_response('Invalid mode. Must be "daily" or "practice"', 400)

    game_logger.log_user_action(request, 'get_meaning', mode)

    def call(service):
        meaning = service.get_meaning(request.player['id'], mode)
        response_data = {
            'success': True,
            'meaning': asdict(meaning) if meaning else None
        }
        game_logger.log_server_response(request, 'get_meaning', True, response_data, mode,
                                        found=meaning is not None)
        return jsonify(response_data)

    return _handle('get_meaning', mode, call)


@game_bp.route('/stats', methods=['GET'])
@require_player
def get_stats():
    """Win rate, guess distribution, daily histogram and streak."""
    game_logger.log_user_action(request, 'get_stats')

    def call(service):
        response_data = {'success': True, **service.get_stats(request.player['id'])}
        game_logger.log_server_response(request, 'get_stats', True, response_data)
        return jsonify(response_data)

    return _handle('get_stats', None, call)


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    game_logger.log_user_action(request, 'health_check')

    def call(service):
        word_stats = get_word_statistics(service.word_list)
        response_data = {
            'status': 'healthy',
            'today': service.today(),
            'reference_timezone': service.reference_timezone,
            'total_words': word_stats.get('total_words', 0),
            'most_common_letters': word_stats.get('most_common_letters', []),
            'active_daily_sessions': len(service.daily_sessions),
            'active_practice_sessions': len(service.practice_sessions),
            'log_stats': game_logger.get_log_stats()
        }
        game_logger.log_server_response(request, 'health_check', True, response_data)
        return jsonify(response_data)

    return _handle('health_check', None, call)
