"""
Room Registry.

Authoritative in-memory map from room code to room record. Owns room
lifecycle: rooms are created here and removed here, nowhere else.
"""

import logging
import threading
from typing import Dict, List, Optional, Any
from datetime import datetime
from .models import RoomData, PlayerData
from utils.constants import ROOM_CODE_MAX_ATTEMPTS, ROOM_CONFIG
from utils.helpers import generate_room_code, clamp_max_players

logger = logging.getLogger(__name__)

class RoomCodeExhaustedError(RuntimeError):
    """Raised when no unused room code could be generated."""

class RoomRegistry:
    """
    Holds every live room for the lifetime of the process.

    The registry is the only shared mutable resource of the coordinator.
    Callers that mutate rooms hold `lock` for the whole event so that
    each event is applied atomically.
    """

    def __init__(self, code_generator=generate_room_code,
                 max_code_attempts: int = ROOM_CODE_MAX_ATTEMPTS):
        """
        Initialize an empty registry.

        Args:
            code_generator: Callable returning a candidate room code
            max_code_attempts: Draws allowed before giving up on a unique code
        """
        self.rooms: Dict[str, RoomData] = {}
        self.lock = threading.RLock()
        self._code_generator = code_generator
        self._max_code_attempts = max_code_attempts
        logger.debug("Room registry initialized")

    def __len__(self) -> int:
        return len(self.rooms)

    def __contains__(self, room_code: str) -> bool:
        return room_code in self.rooms

    def build(self, host_connection_id: str, host_name: str, max_players: Any = None,
              default_max_players: int = ROOM_CONFIG['DEFAULT_MAX_PLAYERS']) -> RoomData:
        """
        Prepare a room with the host as its sole member, without storing it.

        Everything that can fail happens here, so callers can build a room
        before touching any other state and `add` it afterwards.

        Args:
            host_connection_id: Connection id of the creating player
            host_name: Resolved display name of the host
            max_players: Requested capacity, clamped into the allowed range
            default_max_players: Capacity used when max_players is unusable

        Returns:
            The unregistered room

        Raises:
            RoomCodeExhaustedError: If every generated code was already in use
        """
        room = RoomData(
            code=self._allocate_code(),
            host_connection_id=host_connection_id,
            host_name=host_name,
            created_at=datetime.now(),
            max_players=clamp_max_players(max_players, default_max_players)
        )
        room.players.append(PlayerData(connection_id=host_connection_id, name=host_name))
        return room

    def add(self, room: RoomData) -> RoomData:
        """Store a room produced by `build`."""
        if room.code in self.rooms:
            raise RoomCodeExhaustedError(f"Room code {room.code} was taken after it was allocated")
        self.rooms[room.code] = room
        logger.info(f"Created room {room.code} (host {room.host_name}, max {room.max_players})")
        return room

    def create(self, host_connection_id: str, host_name: str, max_players: Any = None,
               default_max_players: int = ROOM_CONFIG['DEFAULT_MAX_PLAYERS']) -> RoomData:
        """Build and store a room in one step."""
        return self.add(self.build(host_connection_id, host_name, max_players, default_max_players))

    def get(self, room_code: Optional[str]) -> Optional[RoomData]:
        """Get room by code, or None if no such room is live."""
        if not room_code:
            return None
        return self.rooms.get(room_code)

    def remove(self, room_code: str) -> Optional[RoomData]:
        """
        Remove a room from the registry.

        Returns:
            The removed room, or None if it was not registered
        """
        room = self.rooms.pop(room_code, None)
        if room:
            logger.info(f"Removed room {room_code}")
        return room

    def list(self) -> List[Dict[str, Any]]:
        """Public views of every live room, for browsing."""
        return [room.to_public_dict() for room in self.rooms.values()]

    def clear(self) -> int:
        """
        Drop every room, used at shutdown.

        Returns:
            Number of rooms dropped
        """
        count = len(self.rooms)
        self.rooms.clear()
        if count:
            logger.info(f"Cleared {count} rooms from registry")
        return count

    def _allocate_code(self) -> str:
        for _ in range(self._max_code_attempts):
            code = self._code_generator()
            if code not in self.rooms:
                return code
            logger.warning(f"Room code collision on {code}, regenerating")
        raise RoomCodeExhaustedError(
            f"No unused room code after {self._max_code_attempts} attempts"
        )
