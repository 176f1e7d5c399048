"""
Rooms Module for the room coordinator.

Contains all room management logic and components.
Handles room lifecycle, membership, host succession, and event routing.
"""

from .models import RoomData, PlayerData
from .registry import RoomRegistry, RoomCodeExhaustedError
from .state_machine import RoomStateMachine, RemovalResult
from .connection_manager import ConnectionManager, ConnectionSession
from .router import EventRouter

__all__ = [
    # Data models
    'RoomData',
    'PlayerData',
    'ConnectionSession',
    'RemovalResult',

    # Managers
    'RoomRegistry',
    'RoomStateMachine',
    'ConnectionManager',
    'EventRouter',

    # Errors
    'RoomCodeExhaustedError'
]
