"""
Wordle Game Server - Main Entry Point

Builds the Flask-SocketIO application and starts serving it.
"""

import os

from wordle_game import create_app
from wordle_game.config import config, validate_word_list_integrity, get_word_statistics
from wordle_game.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    config_name = os.getenv('WORDLE_CONFIG', 'default')
    config_class = config.get(config_name, config['default'])

    try:
        print("Validating word lists...")
        validate_word_list_integrity()
        stats = get_word_statistics()
        print(f"✓ {stats['total_words']} answer words loaded")

        print("Creating Flask application...")
        app, socketio = create_app(config_class)
        print("✓ Flask application created successfully")

        game_logger.logger.info(f"Wordle Server Starting - config={config_name}, "
                                f"storage={config_class.STORAGE_BACKEND}")

        print(f"\nStarting Wordle Game Server on {config_class.HOST}:{config_class.PORT}")
        print(f"Debug mode: {config_class.DEBUG}")
        print(f"Developer tools: {config_class.DEVELOPER_TOOLS_ENABLED}")
        print("=" * 50)

        socketio.run(app, host=config_class.HOST, port=config_class.PORT, debug=config_class.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Wordle Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
