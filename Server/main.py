"""
Wordle Maker Server - Main Entry Point

This is the main entry point for the puzzle server.
It initializes all services and starts the Flask-SocketIO application.
"""

import os
import sys

from wordle_maker import create_app
from wordle_maker.config import config
from wordle_maker.errors import ConfigurationError
from wordle_maker.services.cipher import get_cipher
from wordle_maker.services.game_service import initialize_game_service
from wordle_maker.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    config_class = config.get(os.getenv('APP_ENV', 'default'), config['default'])
    try:
        print("Initializing services...")

        # Load the puzzle key up front so a bad key fails at startup, not on first puzzle
        try:
            get_cipher()
            print("✓ Puzzle key loaded successfully")
        except ConfigurationError as e:
            print(f"✗ Puzzle key configuration error: {e}")
            game_logger.logger.error(f"Puzzle key configuration error: {e}")
            sys.exit(1)

        initialize_game_service()
        print("✓ Game service initialized successfully")

        print("Creating Flask application...")
        app, socketio = create_app(config_class)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Wordle Maker Server Starting")

        print(f"\nStarting Wordle Maker Server on {config_class.HOST}:{config_class.PORT}")
        print(f"Debug mode: {config_class.DEBUG}")
        print("=" * 50)

        socketio.run(app, host=config_class.HOST, port=config_class.PORT, debug=config_class.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Wordle Maker Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
