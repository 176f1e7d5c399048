"""
Room coordinator constants.

This module contains all constant values used throughout the server,
including event names, room states, error codes, and capacity limits.
"""

import string

# Room state constants
ROOM_STATES = {
    'LOBBY': 'lobby',      # Players can join
    'IN_GAME': 'in-game'   # Game in progress, no joining allowed
}

# Cell types for the world grid allocated at game start
CELL_TYPES = {
    'EMPTY': 'empty'
}

# Inbound Socket.IO events
CLIENT_EVENTS = {
    'SET_USERNAME': 'set-username',
    'CREATE_ROOM': 'create-room',
    'JOIN_ROOM': 'join-room',
    'LEAVE_ROOM': 'leave-room',
    'TOGGLE_READY': 'toggle-ready',
    'START_GAME': 'start-game',
    'GET_ROOMS': 'get-rooms'
}

# Outbound Socket.IO events
SERVER_EVENTS = {
    'CONNECTED': 'connected',
    'USERNAME_SET': 'username-set',
    'LOBBY_UPDATE': 'lobby-update',
    'GAME_START': 'game-start'
}

# Error codes returned in acknowledgments
ERROR_CODES = {
    'ROOM_NOT_FOUND': 'ROOM_NOT_FOUND',
    'GAME_ALREADY_STARTED': 'GAME_ALREADY_STARTED',
    'ROOM_FULL': 'ROOM_FULL',
    'NOT_IN_ROOM': 'NOT_IN_ROOM',
    'PLAYER_NOT_IN_ROOM': 'PLAYER_NOT_IN_ROOM',
    'NOT_HOST': 'NOT_HOST',
    'NO_PLAYERS': 'NO_PLAYERS',
    'NOT_ALL_READY': 'NOT_ALL_READY',
    'INTERNAL_ERROR': 'INTERNAL_ERROR'
}

# Room codes
ROOM_CODE_LENGTH = 6
ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits
ROOM_CODE_MAX_ATTEMPTS = 100

# Player names
MAX_NAME_LENGTH = 32
NAME_PREFIX_LENGTH = 4
HOST_NAME_PREFIX = 'Host'
PLAYER_NAME_PREFIX = 'Player'

# Room configuration
ROOM_CONFIG = {
    'MIN_PLAYERS': 2,
    'MAX_PLAYERS': 6,
    'DEFAULT_MAX_PLAYERS': 6,
    'GRID_SIZE': 30
}
