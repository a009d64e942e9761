"""
Controllers Package

HTTP blueprints.
"""

from .game_controller import game_bp

__all__ = ['game_bp']
