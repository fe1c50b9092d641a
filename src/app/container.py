# -*- coding: utf-8 -*-
"""
Application Container Module

Defines the dependency container for the application, holding all service instances centrally.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.event_bus import EventBus
    from services.catalog_service import CatalogService
    from services.config_service import ConfigService
    from services.queue_service import QueueService


@dataclass
class AppContainer:
    """Application Dependency Container

    Holds all service instances centrally, serving as the composition root for dependency injection.

    Usage Example:
        # In main.py
        container = AppContainerFactory.create()
        container.queue_service.load_catalog()
    """

    config: "ConfigService"
    event_bus: "EventBus"
    catalog_service: "CatalogService"
    queue_service: "QueueService"

    def cleanup(self) -> None:
        """Clean up all resources

        Should be called when the application exits.
        """
        if self.event_bus is not None:
            self.event_bus.clear()
