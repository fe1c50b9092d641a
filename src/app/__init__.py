"""
Application Composition Module
"""

from .container import AppContainer
from .container_factory import AppContainerFactory

__all__ = ['AppContainer', 'AppContainerFactory']
