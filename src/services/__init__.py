"""
Service Layer Module
"""

from .config_service import ConfigService
from .catalog_service import CatalogService
from .queue_service import QueueService

__all__ = [
    'ConfigService',
    'CatalogService',
    'QueueService',
]
