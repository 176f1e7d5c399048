"""
Helper utilities for the room coordinator.

This module contains utility functions used throughout the application
for room code generation, name resolution, and room setup.
"""

import secrets
from typing import Any, List
from .constants import (
    CELL_TYPES, MAX_NAME_LENGTH, NAME_PREFIX_LENGTH, PLAYER_NAME_PREFIX,
    ROOM_CODE_ALPHABET, ROOM_CODE_LENGTH, ROOM_CONFIG
)

def generate_room_code(length: int = ROOM_CODE_LENGTH) -> str:
    """Generate a random uppercase alphanumeric room code."""
    return ''.join(secrets.choice(ROOM_CODE_ALPHABET) for _ in range(length))

def normalize_room_code(room_code: Any) -> str:
    """
    Normalize a client-supplied room code for lookup.

    Args:
        room_code: Raw value from the client payload

    Returns:
        Stripped, upper-cased code, or an empty string for non-strings
    """
    if not isinstance(room_code, str):
        return ''
    return room_code.strip().upper()

def default_player_name(connection_id: str, prefix: str = PLAYER_NAME_PREFIX) -> str:
    """Deterministic fallback name derived from the connection id."""
    return f"{prefix}_{connection_id[:NAME_PREFIX_LENGTH]}"

def resolve_player_name(name: Any, connection_id: str,
                        prefix: str = PLAYER_NAME_PREFIX) -> str:
    """
    Resolve the display name for a player.

    Names are trimmed and capped at MAX_NAME_LENGTH characters. Missing,
    blank, or non-string names fall back to a name built from the
    connection id.

    Args:
        name: Name supplied by the client
        connection_id: Connection id of the player
        prefix: Prefix for the fallback name

    Returns:
        Resolved display name
    """
    if isinstance(name, str) and name.strip():
        return name.strip()[:MAX_NAME_LENGTH]
    return default_player_name(connection_id, prefix)

def clamp_max_players(max_players: Any,
                      default: int = ROOM_CONFIG['DEFAULT_MAX_PLAYERS']) -> int:
    """
    Clamp a requested room capacity into the allowed range.

    Missing, zero, non-numeric, or non-finite values use the default capacity.
    """
    try:
        requested = int(max_players) if max_players else default
    except (TypeError, ValueError, OverflowError):
        requested = default
    return min(max(ROOM_CONFIG['MIN_PLAYERS'], requested), ROOM_CONFIG['MAX_PLAYERS'])

def generate_grid(size: int = ROOM_CONFIG['GRID_SIZE']) -> List[List[dict]]:
    """
    Allocate a square grid of empty cells.

    Args:
        size: Width and height of the grid

    Returns:
        size x size matrix of {'type': 'empty', 'hp': 0} cells
    """
    return [
        [{'type': CELL_TYPES['EMPTY'], 'hp': 0} for _ in range(size)]
        for _ in range(size)
    ]
