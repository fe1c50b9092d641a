# -*- coding: utf-8 -*-
"""
Container Factory Module

Responsible for creating and assembling all application dependencies.

This is the **only** instance creation point (Composition Root) for the application.
All service instance creation should be done here, not within individual services.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from app.container import AppContainer
    from core.catalog_source import CatalogSource
    from core.queue_engine import RandomSource

logger = logging.getLogger(__name__)


class AppContainerFactory:
    """Application Container Factory

    Creates and assembles all application dependencies.

    Usage Example:
        # In main.py
        container = AppContainerFactory.create(catalog_location="songs.json")

        # In tests
        container = AppContainerFactory.create_for_testing(source, rng=random.Random(7))
    """

    @staticmethod
    def create(
        config_path: str = "config/default_config.yaml",
        catalog_location: Optional[str] = None,
    ) -> "AppContainer":
        """Create Application Container

        Args:
            config_path: Configuration file path
            catalog_location: Overrides `catalog.source` from the configuration

        Returns:
            A configured AppContainer instance
        """
        from app.container import AppContainer
        from core.event_bus import EventBus
        from services.catalog_service import CatalogService
        from services.config_service import ConfigService
        from services.queue_service import QueueService

        logger.info("Creating application container...")

        # === 1. Infrastructure Layer ===
        config = ConfigService(config_path)
        event_bus = EventBus()

        # === 2. Service Layer ===
        catalog_service = CatalogService.from_config(config, catalog_location)
        queue_service = QueueService(
            catalog_service=catalog_service,
            event_bus=event_bus,
            target_length=int(config.get("queue.target_length", 10)),
            history_limit=int(config.get("queue.history_limit", 10)),
        )

        container = AppContainer(
            config=config,
            event_bus=event_bus,
            catalog_service=catalog_service,
            queue_service=queue_service,
        )

        logger.info("Application container creation complete")
        return container

    @staticmethod
    def create_for_testing(
        catalog_source: "CatalogSource",
        config_path: Optional[str] = None,
        rng: Optional["RandomSource"] = None,
    ) -> "AppContainer":
        """Create a container for testing

        Uses the given catalog source instead of the configured one, and an
        injectable random source so shuffles are reproducible.

        Args:
            catalog_source: Source the catalog is loaded from
            config_path: Configuration file path (defaults to built-in values)
            rng: Random source for queue shuffles

        Returns:
            A configured test AppContainer instance
        """
        from app.container import AppContainer
        from core.event_bus import EventBus
        from services.catalog_service import CatalogService
        from services.config_service import ConfigService
        from services.queue_service import QueueService

        config = ConfigService(config_path)
        event_bus = EventBus()
        catalog_service = CatalogService(catalog_source)
        queue_service = QueueService(
            catalog_service=catalog_service,
            event_bus=event_bus,
            target_length=int(config.get("queue.target_length", 10)),
            history_limit=int(config.get("queue.history_limit", 10)),
            rng=rng,
        )

        return AppContainer(
            config=config,
            event_bus=event_bus,
            catalog_service=catalog_service,
            queue_service=queue_service,
        )
