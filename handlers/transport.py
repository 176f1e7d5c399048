"""
Socket.IO transport for the event router.

Maps the router's room-channel contract onto Flask-SocketIO rooms.
"""

import logging
from flask_socketio import join_room, leave_room

logger = logging.getLogger(__name__)

class SocketIOTransport:
    """Publishes room events through a SocketIO instance."""

    def __init__(self, socketio, namespace: str = '/'):
        self.socketio = socketio
        self.namespace = namespace

    def publish(self, room_code: str, event: str, payload) -> None:
        """Emit an event to every connection joined to a room channel."""
        self.socketio.emit(event, payload, to=room_code, namespace=self.namespace)

    def send(self, connection_id: str, event: str, payload) -> None:
        """Emit an event to a single connection."""
        self.socketio.emit(event, payload, to=connection_id, namespace=self.namespace)

    def subscribe(self, connection_id: str, room_code: str) -> None:
        join_room(room_code, sid=connection_id, namespace=self.namespace)
        logger.debug(f"{connection_id} subscribed to channel {room_code}")

    def unsubscribe(self, connection_id: str, room_code: str) -> None:
        leave_room(room_code, sid=connection_id, namespace=self.namespace)
        logger.debug(f"{connection_id} unsubscribed from channel {room_code}")
