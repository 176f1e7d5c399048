"""
Socket.IO Event Handlers for the room coordinator.

Pure routing layer that delegates to the event router.
Contains no room logic - the value each handler returns is sent back
to the client as the Socket.IO acknowledgment.
"""

import logging
from flask import request
from utils.constants import CLIENT_EVENTS, ERROR_CODES

logger = logging.getLogger(__name__)

INTERNAL_ERROR_ACK = {'ok': False, 'error': ERROR_CODES['INTERNAL_ERROR']}

def register_socket_handlers(socketio, router):
    """
    Register all Socket.IO event handlers.

    Args:
        socketio: SocketIO instance
        router: EventRouter bound to a transport for this SocketIO instance
    """

    @socketio.on('connect')
    def handle_connect(auth=None):
        """Handle client connection."""
        logger.info(f"Client connected: {request.sid}")
        router.connect(request.sid)

    @socketio.on('disconnect')
    def handle_disconnect(reason=None):
        """Handle client disconnection."""
        logger.info(f"Client disconnected: {request.sid}")

        try:
            router.disconnect(request.sid)
        except Exception as e:
            logger.error(f"Error handling disconnect: {e}")

    @socketio.on(CLIENT_EVENTS['SET_USERNAME'])
    def handle_set_username(name=None):
        """Handle display name selection."""
        try:
            router.set_username(request.sid, name)
        except Exception as e:
            logger.error(f"Error setting username: {e}")

    @socketio.on(CLIENT_EVENTS['CREATE_ROOM'])
    def handle_create_room(data=None):
        """Handle room creation request."""
        try:
            return router.create_room(request.sid, data)
        except Exception as e:
            logger.error(f"Error creating room: {e}")
            return INTERNAL_ERROR_ACK

    @socketio.on(CLIENT_EVENTS['JOIN_ROOM'])
    def handle_join_room(data=None):
        """Handle player joining a room."""
        try:
            return router.join_room(request.sid, data)
        except Exception as e:
            logger.error(f"Error joining room: {e}")
            return INTERNAL_ERROR_ACK

    @socketio.on(CLIENT_EVENTS['LEAVE_ROOM'])
    def handle_leave_room(data=None):
        """Handle player leaving a room."""
        try:
            return router.leave_room(request.sid)
        except Exception as e:
            logger.error(f"Error leaving room: {e}")
            return INTERNAL_ERROR_ACK

    @socketio.on(CLIENT_EVENTS['TOGGLE_READY'])
    def handle_toggle_ready(data=None):
        """Handle ready toggle."""
        try:
            return router.toggle_ready(request.sid)
        except Exception as e:
            logger.error(f"Error toggling ready: {e}")
            return INTERNAL_ERROR_ACK

    @socketio.on(CLIENT_EVENTS['START_GAME'])
    def handle_start_game(data=None):
        """Handle game start request."""
        try:
            return router.start_game(request.sid)
        except Exception as e:
            logger.error(f"Error starting game: {e}")
            return INTERNAL_ERROR_ACK

    @socketio.on(CLIENT_EVENTS['GET_ROOMS'])
    def handle_get_rooms(data=None):
        """Handle request for the room list."""
        try:
            return router.get_rooms(request.sid)
        except Exception as e:
            logger.error(f"Error listing rooms: {e}")
            return INTERNAL_ERROR_ACK

    logger.info("Socket.IO handlers registered successfully")
