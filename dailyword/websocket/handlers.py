"""
WebSocket Event Handlers

Live clients join a per-player room and receive session completion, streak
and statistics updates as they happen.
"""

from flask_socketio import emit, join_room, leave_room
from ..utils.decorators import websocket_player_required
from ..utils.game_logger import game_logger


def player_room(player_id: str) -> str:
    return f"player_{player_id}"


def make_notifier(socketio):
    """Notifier for GameService that emits into the player's room."""
    def notify(event_name, payload, player_id):
        socketio.emit(event_name, payload, room=player_room(player_id))
    return notify


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    @socketio.on('join_player')
    @websocket_player_required
    def handle_join_player(data, player=None):
        """Subscribe this connection to the player's game events."""
        join_room(player_room(player['id']))
        game_logger.logger.info(f"WebSocket: player {player['id']} joined")
        emit('player_joined', {'player_id': player['id']})

    @socketio.on('leave_player')
    @websocket_player_required
    def handle_leave_player(data, player=None):
        """Stop receiving the player's game events."""
        leave_room(player_room(player['id']))
        game_logger.logger.info(f"WebSocket: player {player['id']} left")
        emit('player_left', {'player_id': player['id']})
