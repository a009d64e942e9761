"""
WebSocket Package

Socket.IO event handlers.
"""

from .handlers import register_websocket_handlers

__all__ = ['register_websocket_handlers']
