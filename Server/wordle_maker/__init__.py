"""
Wordle Maker Server Application Package

Lets a player hide a secret word inside a shareable link and lets anyone
holding the link play it. Puzzle tokens are AES-GCM sealed; gameplay runs
through an in-memory session engine exposed over HTTP and WebSocket.
"""

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from .config import Config


def create_app(config_class=Config):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use

    Returns:
        Flask application instance with all extensions initialized
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    CORS(app)
    socketio = SocketIO(app, cors_allowed_origins="*", logger=False, engineio_logger=False)

    # Register blueprints
    from .controllers.puzzle_controller import puzzle_bp
    from .controllers.game_controller import game_bp

    app.register_blueprint(puzzle_bp, url_prefix='/api')
    app.register_blueprint(game_bp, url_prefix='/api')

    # Register WebSocket handlers
    from .websocket.handlers import register_websocket_handlers
    register_websocket_handlers(socketio)

    # Store socketio instance for use in other modules
    app.socketio = socketio

    return app, socketio
