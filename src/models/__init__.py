"""
Data Models Module
"""

from .song import Song
from .queue_state import QueueSnapshot

__all__ = ['Song', 'QueueSnapshot']
