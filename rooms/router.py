"""
Event Router for rooms.

Resolves inbound per-connection events against the registry and the
state machine, then fans the resulting room view out through a
transport. Knows nothing about Socket.IO: any object with
`publish`, `send`, `subscribe` and `unsubscribe` will do.
"""

import logging
from typing import Any, Dict, Optional
from .connection_manager import ConnectionManager
from .registry import RoomRegistry
from .state_machine import RoomStateMachine, RemovalResult
from utils.constants import ERROR_CODES, SERVER_EVENTS
from utils.helpers import normalize_room_code, resolve_player_name

logger = logging.getLogger(__name__)

def _ok(**fields) -> Dict[str, Any]:
    return {'ok': True, **fields}

def _error(code: str) -> Dict[str, Any]:
    return {'ok': False, 'error': code}

def _payload(data: Any) -> Dict[str, Any]:
    return data if isinstance(data, dict) else {}

class EventRouter:
    """
    Per-connection event dispatch.

    Each public method handles one inbound event to completion while
    holding the registry lock, and returns the acknowledgment for the
    originating connection (or None for events without an ack).
    """

    def __init__(self, registry: RoomRegistry, state_machine: RoomStateMachine,
                 transport, connection_manager: Optional[ConnectionManager] = None):
        """
        Initialize the router.

        Args:
            registry: Registry of live rooms
            state_machine: State machine operating on the same registry
            transport: Room channel publisher (publish/send/subscribe/unsubscribe)
            connection_manager: Session store, created if not given
        """
        self.registry = registry
        self.state_machine = state_machine
        self.transport = transport
        self.connections = connection_manager if connection_manager is not None else ConnectionManager()

    def connect(self, connection_id: str) -> None:
        """Open a session for a new connection."""
        with self.registry.lock:
            self.connections.register_connection(connection_id)
        self.transport.send(connection_id, SERVER_EVENTS['CONNECTED'], {'id': connection_id})

    def set_username(self, connection_id: str, name: Any) -> str:
        """Store the connection's display name and echo it back."""
        with self.registry.lock:
            resolved = resolve_player_name(name, connection_id)
            self.connections.set_name(connection_id, resolved)
        self.transport.send(connection_id, SERVER_EVENTS['USERNAME_SET'], resolved)
        return resolved

    def create_room(self, connection_id: str, data: Any = None) -> Dict[str, Any]:
        payload = _payload(data)
        with self.registry.lock:
            room = self.state_machine.build_room(
                connection_id, payload.get('name'), payload.get('maxPlayers')
            )
            self._leave_current_room(connection_id)
            self.state_machine.open_room(room)
            self._enter_room(connection_id, room.code, room.host_name)

            view = room.to_public_dict()
            self._publish_update(room.code, view)
            return _ok(room=view)

    def join_room(self, connection_id: str, data: Any = None) -> Dict[str, Any]:
        payload = _payload(data)
        room_code = normalize_room_code(payload.get('roomId'))
        with self.registry.lock:
            current_code = self.connections.get_room_code(connection_id)
            if current_code and current_code == room_code:
                room = self.registry.get(room_code)
                if room and room.has_player(connection_id):
                    return _ok(room=room.to_public_dict())

            allowed, error, _ = self.state_machine.can_join(room_code)
            if not allowed:
                logger.info(f"Connection {connection_id} could not join {room_code}: {error}")
                return _error(error)

            self._leave_current_room(connection_id)

            success, error, room = self.state_machine.join(room_code, connection_id, payload.get('name'))
            if not success:
                return _error(error)

            player = room.get_player(connection_id)
            self._enter_room(connection_id, room.code, player.name)

            view = room.to_public_dict()
            self._publish_update(room.code, view)
            return _ok(room=view)

    def leave_room(self, connection_id: str) -> Dict[str, Any]:
        with self.registry.lock:
            room_code = self.connections.get_room_code(connection_id)
            if not room_code:
                return _error(ERROR_CODES['NOT_IN_ROOM'])

            success, error, result = self.state_machine.leave(room_code, connection_id)
            if not success:
                if error == ERROR_CODES['PLAYER_NOT_IN_ROOM']:
                    return _error(ERROR_CODES['NOT_IN_ROOM'])
                return _error(error)

            self._exit_room(connection_id, room_code)
            self._announce_removal(result)
            return _ok()

    def toggle_ready(self, connection_id: str) -> Dict[str, Any]:
        with self.registry.lock:
            room_code = self.connections.get_room_code(connection_id)
            if not room_code:
                return _error(ERROR_CODES['NOT_IN_ROOM'])

            success, error, player = self.state_machine.toggle_ready(room_code, connection_id)
            if not success:
                return _error(error)

            self._publish_update(room_code, self.registry.get(room_code).to_public_dict())
            return _ok(ready=player.ready)

    def start_game(self, connection_id: str) -> Dict[str, Any]:
        with self.registry.lock:
            room_code = self.connections.get_room_code(connection_id)
            if not room_code:
                return _error(ERROR_CODES['NOT_IN_ROOM'])

            success, error, start_payload = self.state_machine.start_game(room_code, connection_id)
            if not success:
                logger.info(f"Start of room {room_code} by {connection_id} rejected: {error}")
                return _error(error)

            self.transport.publish(room_code, SERVER_EVENTS['GAME_START'], start_payload)
            self._publish_update(room_code, self.registry.get(room_code).to_public_dict())
            return _ok(started=True)

    def get_rooms(self, connection_id: str) -> Dict[str, Any]:
        with self.registry.lock:
            return _ok(rooms=self.registry.list())

    def disconnect(self, connection_id: str) -> None:
        """Clean up after a dropped connection. Never fails, never acks."""
        with self.registry.lock:
            self._leave_current_room(connection_id)
            self.connections.unregister_connection(connection_id)

    def _leave_current_room(self, connection_id: str) -> None:
        room_code = self.connections.get_room_code(connection_id)
        if not room_code:
            return
        result = self.state_machine.disconnect(room_code, connection_id)
        self._exit_room(connection_id, room_code)
        if result:
            self._announce_removal(result)

    def _enter_room(self, connection_id: str, room_code: str, name: str) -> None:
        self.connections.associate_with_room(connection_id, room_code)
        self.connections.set_name(connection_id, name)
        self.transport.subscribe(connection_id, room_code)

    def _exit_room(self, connection_id: str, room_code: str) -> None:
        self.connections.disassociate_from_room(connection_id)
        self.transport.unsubscribe(connection_id, room_code)

    def _announce_removal(self, result: RemovalResult) -> None:
        if result.room_destroyed:
            return
        self._publish_update(result.room.code, result.room.to_public_dict())

    def _publish_update(self, room_code: str, view: Dict[str, Any]) -> None:
        self.transport.publish(room_code, SERVER_EVENTS['LOBBY_UPDATE'], view)
