"""
Handlers Module for the room coordinator.

Contains all web layer handlers (Socket.IO and API) with no room logic.
Handlers coordinate between the web layer and the rooms module.
"""

from .socket_handlers import register_socket_handlers
from .api_handlers import register_api_handlers
from .transport import SocketIOTransport

__all__ = [
    'register_socket_handlers',
    'register_api_handlers',
    'SocketIOTransport'
]
