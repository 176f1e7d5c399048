"""
Room State Machine.

Enforces membership rules, host succession, and the one-way
lobby -> in-game transition. Every operation either fully applies or
leaves the room untouched.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Dict, Any
from .models import RoomData, PlayerData
from .registry import RoomRegistry
from utils.constants import ERROR_CODES, ROOM_STATES, ROOM_CONFIG, HOST_NAME_PREFIX
from utils.helpers import resolve_player_name, generate_grid

logger = logging.getLogger(__name__)

@dataclass
class RemovalResult:
    """Outcome of removing a player from a room."""
    room: RoomData
    player: PlayerData
    host_changed: bool = False
    room_destroyed: bool = False

class RoomStateMachine:
    """Applies room transitions against a registry."""

    def __init__(self, registry: RoomRegistry, grid_size: int = ROOM_CONFIG['GRID_SIZE'],
                 require_all_ready: bool = False,
                 default_max_players: int = ROOM_CONFIG['DEFAULT_MAX_PLAYERS']):
        """
        Initialize the state machine.

        Args:
            registry: Registry holding the rooms to operate on
            grid_size: Width and height of the grid allocated at game start
            require_all_ready: Reject start-game unless every player is ready
            default_max_players: Capacity used when create-room names none
        """
        self.registry = registry
        self.grid_size = grid_size
        self.require_all_ready = require_all_ready
        self.default_max_players = default_max_players

    def build_room(self, connection_id: str, name: Any = None,
                   max_players: Any = None) -> RoomData:
        """Prepare, but do not register, a room hosted by connection_id."""
        host_name = resolve_player_name(name, connection_id, prefix=HOST_NAME_PREFIX)
        return self.registry.build(connection_id, host_name, max_players, self.default_max_players)

    def open_room(self, room: RoomData) -> RoomData:
        """Register a room prepared by build_room."""
        return self.registry.add(room)

    def create_room(self, connection_id: str, name: Any = None,
                    max_players: Any = None) -> RoomData:
        """Create a room hosted by connection_id."""
        return self.open_room(self.build_room(connection_id, name, max_players))

    def can_join(self, room_code: Optional[str]) -> Tuple[bool, Optional[str], Optional[RoomData]]:
        """
        Check whether a new player could join a room right now.

        Returns:
            tuple: (allowed, error_code, room)
        """
        room = self.registry.get(room_code)
        if not room:
            return False, ERROR_CODES['ROOM_NOT_FOUND'], None
        if not room.in_lobby:
            return False, ERROR_CODES['GAME_ALREADY_STARTED'], room
        if room.is_full:
            return False, ERROR_CODES['ROOM_FULL'], room
        return True, None, room

    def join(self, room_code: Optional[str], connection_id: str,
             name: Any = None) -> Tuple[bool, Optional[str], Optional[RoomData]]:
        """
        Add a player to a room in the lobby state.

        Args:
            room_code: Code of the room to join
            connection_id: Connection id of the joining player
            name: Requested display name, resolved before use

        Returns:
            tuple: (success, error_code, room)
        """
        allowed, error, room = self.can_join(room_code)
        if not allowed:
            logger.info(f"Join of {room_code} by {connection_id} rejected: {error}")
            return False, error, room

        player_name = resolve_player_name(name, connection_id)
        room.players.append(PlayerData(connection_id=connection_id, name=player_name))

        logger.info(f"Player {player_name} joined room {room.code} ({room.player_count}/{room.max_players})")
        return True, None, room

    def leave(self, room_code: Optional[str],
              connection_id: str) -> Tuple[bool, Optional[str], Optional[RemovalResult]]:
        """
        Remove a player who asked to leave.

        Returns:
            tuple: (success, error_code, removal_result)
        """
        room = self.registry.get(room_code)
        if not room:
            return False, ERROR_CODES['ROOM_NOT_FOUND'], None
        if not room.has_player(connection_id):
            return False, ERROR_CODES['PLAYER_NOT_IN_ROOM'], None

        return True, None, self._remove_player(room, connection_id)

    def disconnect(self, room_code: Optional[str], connection_id: str) -> Optional[RemovalResult]:
        """
        Remove a player whose connection dropped.

        Never fails; returns None when there was nothing to clean up.
        """
        room = self.registry.get(room_code)
        if not room or not room.has_player(connection_id):
            return None
        return self._remove_player(room, connection_id)

    def toggle_ready(self, room_code: Optional[str],
                     connection_id: str) -> Tuple[bool, Optional[str], Optional[PlayerData]]:
        """
        Flip a player's ready flag.

        Returns:
            tuple: (success, error_code, player)
        """
        room = self.registry.get(room_code)
        if not room:
            return False, ERROR_CODES['ROOM_NOT_FOUND'], None

        player = room.get_player(connection_id)
        if not player:
            return False, ERROR_CODES['PLAYER_NOT_IN_ROOM'], None

        player.ready = not player.ready
        logger.debug(f"Player {player.name} in room {room.code} ready={player.ready}")
        return True, None, player

    def start_game(self, room_code: Optional[str],
                   connection_id: str) -> Tuple[bool, Optional[str], Optional[Dict[str, Any]]]:
        """
        Move a room from the lobby into a game.

        Only the host may start. A room already in-game is started again
        with a fresh grid; the state never goes back to lobby.

        Returns:
            tuple: (success, error_code, start_payload)
        """
        room = self.registry.get(room_code)
        if not room:
            return False, ERROR_CODES['ROOM_NOT_FOUND'], None
        if not room.is_host(connection_id):
            return False, ERROR_CODES['NOT_HOST'], None
        if room.is_empty:
            return False, ERROR_CODES['NO_PLAYERS'], None
        if self.require_all_ready and not all(p.ready for p in room.players):
            return False, ERROR_CODES['NOT_ALL_READY'], None

        room.state = ROOM_STATES['IN_GAME']
        room.grid = generate_grid(self.grid_size)

        logger.info(f"Started game in room {room.code} with {room.player_count} players")
        return True, None, room.to_start_dict()

    def _remove_player(self, room: RoomData, connection_id: str) -> RemovalResult:
        player = room.get_player(connection_id)
        room.players.remove(player)
        result = RemovalResult(room=room, player=player)
        logger.info(f"Player {player.name} removed from room {room.code}")

        if room.is_empty:
            self.registry.remove(room.code)
            result.room_destroyed = True
            return result

        if room.is_host(connection_id):
            new_host = room.players[0]
            room.host_connection_id = new_host.connection_id
            room.host_name = new_host.name
            result.host_changed = True
            logger.info(f"Host of room {room.code} passed to {new_host.name}")

        return result
