"""
Connection Manager for rooms.

Tracks the session context attached to each live connection: its
display name and the room it currently belongs to. Contains no room
logic - purely connection and session bookkeeping.
"""

import logging
from typing import Dict, Optional
from dataclasses import dataclass, field
from datetime import datetime

logger = logging.getLogger(__name__)

@dataclass
class ConnectionSession:
    """Session context for a single connection."""
    connection_id: str
    name: Optional[str] = None
    room_code: Optional[str] = None
    connection_time: datetime = field(default_factory=datetime.now)

class ConnectionManager:
    """
    Manages connection sessions keyed by connection id.

    A session is created on connect and destroyed on disconnect.
    """

    def __init__(self):
        self.sessions: Dict[str, ConnectionSession] = {}  # connection_id -> ConnectionSession
        logger.debug("Connection manager initialized")

    def __len__(self) -> int:
        return len(self.sessions)

    def register_connection(self, connection_id: str) -> ConnectionSession:
        """
        Register a new connection, or return its existing session.

        Args:
            connection_id: Unique connection ID

        Returns:
            The connection's session
        """
        session = self.sessions.get(connection_id)
        if session is None:
            session = ConnectionSession(connection_id=connection_id)
            self.sessions[connection_id] = session
            logger.info(f"Registered connection {connection_id}")
        return session

    def unregister_connection(self, connection_id: str) -> Optional[ConnectionSession]:
        """
        Drop a connection's session.

        Returns:
            The removed session, or None if it was not registered
        """
        session = self.sessions.pop(connection_id, None)
        if session:
            logger.info(f"Unregistered connection {connection_id}")
        return session

    def get_session(self, connection_id: str) -> Optional[ConnectionSession]:
        return self.sessions.get(connection_id)

    def get_or_create_session(self, connection_id: str) -> ConnectionSession:
        """Session for a connection, registering it if the connect event was missed."""
        return self.register_connection(connection_id)

    def set_name(self, connection_id: str, name: str) -> None:
        self.get_or_create_session(connection_id).name = name

    def associate_with_room(self, connection_id: str, room_code: str) -> None:
        """Associate a connection with a room."""
        self.get_or_create_session(connection_id).room_code = room_code
        logger.debug(f"Associated {connection_id} with room {room_code}")

    def disassociate_from_room(self, connection_id: str) -> Optional[str]:
        """
        Clear a connection's room association.

        Returns:
            Previous room code, or None if not associated
        """
        session = self.sessions.get(connection_id)
        if not session:
            return None
        previous_room = session.room_code
        session.room_code = None
        if previous_room:
            logger.debug(f"Disassociated {connection_id} from room {previous_room}")
        return previous_room

    def get_room_code(self, connection_id: str) -> Optional[str]:
        session = self.sessions.get(connection_id)
        return session.room_code if session else None
