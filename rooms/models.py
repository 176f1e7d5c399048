"""
Data models for room management.

These are pure data structures used to pass information between
the registry, the state machine, and handlers.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any
from datetime import datetime
from utils.constants import ROOM_STATES, ROOM_CONFIG

@dataclass
class PlayerData:
    """Represents a player in a room."""
    connection_id: str
    name: str
    ready: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.connection_id,
            'name': self.name,
            'ready': self.ready
        }

    def to_roster_dict(self) -> Dict[str, Any]:
        """Roster entry sent with game-start (no readiness)."""
        return {
            'id': self.connection_id,
            'name': self.name
        }

@dataclass
class RoomData:
    """Represents a room's current state."""
    code: str
    host_connection_id: str
    host_name: str
    created_at: datetime
    max_players: int = ROOM_CONFIG['DEFAULT_MAX_PLAYERS']
    players: List[PlayerData] = field(default_factory=list)
    state: str = ROOM_STATES['LOBBY']
    grid: Optional[List[List[Dict[str, Any]]]] = None

    @property
    def player_count(self) -> int:
        """Number of players in the room."""
        return len(self.players)

    @property
    def is_full(self) -> bool:
        """Check if room is at max capacity."""
        return self.player_count >= self.max_players

    @property
    def is_empty(self) -> bool:
        return not self.players

    @property
    def in_lobby(self) -> bool:
        return self.state == ROOM_STATES['LOBBY']

    @property
    def grid_size(self) -> int:
        return len(self.grid) if self.grid is not None else 0

    def get_player(self, connection_id: str) -> Optional[PlayerData]:
        """Find player by connection ID."""
        for player in self.players:
            if player.connection_id == connection_id:
                return player
        return None

    def has_player(self, connection_id: str) -> bool:
        return self.get_player(connection_id) is not None

    def is_host(self, connection_id: str) -> bool:
        return self.host_connection_id == connection_id

    def to_public_dict(self) -> Dict[str, Any]:
        """Public view broadcast to every member of the room."""
        return {
            'id': self.code,
            'host': self.host_connection_id,
            'hostName': self.host_name,
            'players': [p.to_dict() for p in self.players],
            'state': self.state,
            'maxPlayers': self.max_players
        }

    def to_start_dict(self) -> Dict[str, Any]:
        """Payload broadcast once when the game starts."""
        return {
            'roomId': self.code,
            'gridSize': self.grid_size,
            'grid': self.grid,
            'players': [p.to_roster_dict() for p in self.players]
        }

    def to_dict(self) -> Dict[str, Any]:
        """Full room state, including bookkeeping, for diagnostics."""
        return {
            **self.to_public_dict(),
            'playerCount': self.player_count,
            'isFull': self.is_full,
            'gridSize': self.grid_size,
            'createdAt': self.created_at.isoformat()
        }
