"""
Utilities module for the room coordinator.

This module contains constants and helper functions
used throughout the application.
"""

from .constants import ROOM_STATES, ERROR_CODES, CLIENT_EVENTS, SERVER_EVENTS, ROOM_CONFIG
from .helpers import (
    generate_room_code, normalize_room_code, resolve_player_name,
    clamp_max_players, generate_grid
)

__all__ = [
    'ROOM_STATES',
    'ERROR_CODES',
    'CLIENT_EVENTS',
    'SERVER_EVENTS',
    'ROOM_CONFIG',
    'generate_room_code',
    'normalize_room_code',
    'resolve_player_name',
    'clamp_max_players',
    'generate_grid'
]
