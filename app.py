"""
Room Coordinator - Real-time multiplayer lobby server.

Flask-SocketIO backend that tracks open rooms, admits players under
capacity and state constraints, manages host succession, and moves
rooms from the lobby into a game, broadcasting room state at each step.
"""

import logging
from flask import Flask
from flask_socketio import SocketIO
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from config import settings
from rooms import RoomRegistry, RoomStateMachine, ConnectionManager, EventRouter
from handlers import register_socket_handlers, register_api_handlers, SocketIOTransport

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

def create_app(**overrides):
    """
    Application factory that creates and configures the Flask app.

    Args:
        **overrides: Values replacing entries of config.settings

    Returns:
        Configured Flask app with SocketIO
    """
    config = {**settings.as_dict(), **overrides}
    cors_origins = config['CORS_ORIGINS'].split(',')

    # Flask configuration
    app = Flask(__name__)
    app.config['SECRET_KEY'] = config['SECRET_KEY']

    CORS(app, origins=cors_origins)

    # ProxyFix for deployment behind reverse proxy
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1)

    # SocketIO configuration
    socketio = SocketIO(
        app,
        cors_allowed_origins=cors_origins,
        async_mode=config['ASYNC_MODE'],
        ping_timeout=config['PING_TIMEOUT'],
        ping_interval=config['PING_INTERVAL']
    )

    # Room coordination (single registry for the process lifetime)
    logger.info("Initializing room coordinator...")
    registry = RoomRegistry()
    state_machine = RoomStateMachine(
        registry,
        grid_size=config['GRID_SIZE'],
        require_all_ready=config['REQUIRE_ALL_READY'],
        default_max_players=config['DEFAULT_MAX_PLAYERS']
    )
    connection_manager = ConnectionManager()
    router = EventRouter(
        registry=registry,
        state_machine=state_machine,
        transport=SocketIOTransport(socketio),
        connection_manager=connection_manager
    )

    app.extensions['room_registry'] = registry
    app.extensions['room_router'] = router

    # Register handlers (pure routing layer)
    logger.info("Registering handlers...")
    register_socket_handlers(socketio, router)
    register_api_handlers(app, registry, connection_manager)

    logger.info("Application initialization complete")

    return app, socketio

def main():
    """Main entry point for development server."""

    app, socketio = create_app()

    logger.info(f"Starting room coordinator on port {settings.PORT}")
    logger.info(f"Debug mode: {settings.DEBUG}")
    logger.info(f"CORS origins: {settings.CORS_ORIGINS}")

    try:
        socketio.run(app, debug=settings.DEBUG, port=settings.PORT, host=settings.HOST)
    finally:
        app.extensions['room_registry'].clear()

if __name__ == '__main__':
    main()
