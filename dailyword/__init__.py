"""
Daily Word Puzzle Server Package

A daily word-guessing game: one shared puzzle per calendar day, practice
games, streaks and statistics, served over HTTP with live updates over
Socket.IO.
"""

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from .config import Config


def create_app(config_class=Config, store=None, dictionary=None):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use
        store: Persisted store override (defaults to MongoDB or memory per config)
        dictionary: Dictionary oracle override

    Returns:
        Tuple of (Flask application, SocketIO instance)
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    CORS(app)
    socketio = SocketIO(app, cors_allowed_origins="*", logger=False, engineio_logger=False)

    # Wire services
    from .services.game_service import GameService
    from .services.player_service import PlayerService
    from .websocket.handlers import make_notifier, register_websocket_handlers

    app.extensions['game_service'] = GameService.from_config(
        config_class, store=store, dictionary=dictionary, notifier=make_notifier(socketio)
    )
    app.extensions['player_service'] = PlayerService(
        config_class.JWT_SECRET, config_class.JWT_EXPIRATION_DAYS
    )

    # Register blueprints
    from .controllers.player_controller import player_bp
    from .controllers.game_controller import game_bp

    app.register_blueprint(player_bp, url_prefix='/api')
    app.register_blueprint(game_bp, url_prefix='/api')

    # Register WebSocket handlers
    register_websocket_handlers(socketio)

    app.socketio = socketio

    return app, socketio
