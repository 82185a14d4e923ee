"""
Daily Word Puzzle Server - Main Entry Point

Builds the Flask-SocketIO application from the environment configuration
and starts serving.
"""

from dailyword import create_app
from dailyword.config import config
from dailyword.utils.game_logger import game_logger
import os


def main():
    """Main function to create the app and start the server."""
    config_class = config.get(os.getenv('APP_ENV', 'default'), config['default'])

    try:
        app, socketio = create_app(config_class)
        game_service = app.extensions['game_service']

        game_logger.logger.info(
            f"Daily Word Server starting - reference timezone {game_service.reference_timezone}, "
            f"today is {game_service.today()}"
        )

        print(f"\nStarting Daily Word Server on {config_class.HOST}:{config_class.PORT}")
        print(f"Debug mode: {config_class.DEBUG}")
        print(f"Words loaded: {len(game_service.word_list)}")
        print("=" * 50)

        socketio.run(app, host=config_class.HOST, port=config_class.PORT, debug=config_class.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Daily Word Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
