"""
API Route Handlers for the room coordinator.

Pure routing layer that delegates to the room registry.
Contains no room logic - only request/response handling.
"""

import logging
from flask import jsonify
from utils.helpers import normalize_room_code

logger = logging.getLogger(__name__)

def register_api_handlers(app, registry, connection_manager):
    """
    Register all API route handlers.

    Args:
        app: Flask application instance
        registry: Room registry instance
        connection_manager: Connection session store
    """

    @app.route('/api/health')
    def health_check():
        """Health check endpoint."""
        with registry.lock:
            return jsonify({
                'status': 'healthy',
                'message': 'Room coordinator is running',
                'rooms': len(registry),
                'connections': len(connection_manager)
            })

    @app.route('/api/rooms')
    def get_rooms():
        """Get list of live rooms."""
        with registry.lock:
            return jsonify({'rooms': registry.list()})

    @app.route('/api/rooms/<room_code>')
    def get_room(room_code):
        """Get a single room's state."""
        with registry.lock:
            room = registry.get(normalize_room_code(room_code))
            if not room:
                return jsonify({'error': 'Room not found'}), 404
            return jsonify({'room': room.to_dict()})

    # Error handlers
    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        return jsonify({'error': 'Internal server error'}), 500

    logger.info("API handlers registered successfully")
