"""
Daily Wordle Server Application Package

Flask + Socket.IO server that owns the game core (scoring, keyboard hints,
the game state machine and daily saves) and exposes it to a browser client.
"""

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from .config import Config


def create_app(config_class=Config, word_source=None, store=None):
    """
    Application factory pattern for creating Flask app instances.
    
    Args:
        config_class: Configuration class to use
        word_source: Optional WordSource replacing the bundled word lists
        store: Optional StateStore replacing the configured storage backend
        
    Returns:
        Tuple of (Flask application, SocketIO instance)
    """
    from .services.game_service import GameService
    from .services.persistence import create_state_store
    from .services.word_source import WordSource

    app = Flask(__name__)
    app.config.from_object(config_class)
    
    # Initialize extensions
    CORS(app)
    socketio = SocketIO(app, cors_allowed_origins="*", logger=False, engineio_logger=False)
    
    app.extensions['wordle_game'] = GameService(
        word_source=word_source or WordSource(),
        store=store if store is not None else create_state_store(app.config),
        developer_tools_enabled=app.config['DEVELOPER_TOOLS_ENABLED']
    )
    
    # Register blueprints
    from .controllers.game_controller import game_bp
    app.register_blueprint(game_bp, url_prefix='/api')
    
    # Register WebSocket handlers
    from .websocket.handlers import register_websocket_handlers
    register_websocket_handlers(socketio)
    
    # Store socketio instance for use in other modules
    app.socketio = socketio
    
    return app, socketio
