# -*- coding: utf-8 -*-
"""
Event Bus Module - Publish-Subscribe Pattern Implementation

Lets observers (the console front end, tests) follow queue state changes
without the queue service knowing about them.

Design Notes:
- Dispatch is synchronous, in the publishing thread
- There is exactly one logical caller, so no worker pool is used
- A failing subscriber is logged and does not stop delivery to the others
"""

from typing import Dict, Callable, Any
from enum import Enum
import threading
import uuid
import logging

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Event type enumeration"""

    # Catalog events
    CATALOG_LOADING = "catalog_loading"
    CATALOG_LOADED = "catalog_loaded"
    CATALOG_LOAD_FAILED = "catalog_load_failed"

    # Queue state events
    CURRENT_CHANGED = "current_changed"
    QUEUE_CHANGED = "queue_changed"
    HISTORY_CHANGED = "history_changed"
    GENRE_FILTER_CHANGED = "genre_filter_changed"

    # System events
    ERROR_OCCURRED = "error_occurred"


class EventBus:
    """
    Event Bus

    Usage example:
        event_bus = EventBus()

        # Subscribe to event
        def on_current_changed(snapshot):
            logger.info("Playing: %s", snapshot.current.title)

        sub_id = event_bus.subscribe(EventType.CURRENT_CHANGED, on_current_changed)

        # Publish event
        event_bus.publish(EventType.CURRENT_CHANGED, snapshot)

        # Unsubscribe
        event_bus.unsubscribe(sub_id)
    """

    def __init__(self):
        self._subscribers: Dict[EventType, Dict[str, Callable]] = {}
        self._sub_lock = threading.Lock()

    def subscribe(
        self,
        event_type: EventType,
        callback: Callable[[Any], None]
    ) -> str:
        """
        Subscribe to event

        Args:
            event_type: Event type
            callback: Callback function, receiving event data as an argument

        Returns:
            str: Subscription ID, used for unsubscription
        """
        subscription_id = str(uuid.uuid4())

        with self._sub_lock:
            if event_type not in self._subscribers:
                self._subscribers[event_type] = {}
            self._subscribers[event_type][subscription_id] = callback

        return subscription_id

    def unsubscribe(self, subscription_id: str) -> bool:
        """
        Unsubscribe

        Args:
            subscription_id: The ID returned when subscribing

        Returns:
            bool: Whether the unsubscription was successful
        """
        with self._sub_lock:
            for event_type in self._subscribers:
                if subscription_id in self._subscribers[event_type]:
                    del self._subscribers[event_type][subscription_id]
                    return True
        return False

    def publish(self, event_type: EventType, data: Any = None) -> None:
        """
        Publish event

        All callbacks are executed in the current thread, in subscription order.

        Args:
            event_type: Event type
            data: Event data
        """
        with self._sub_lock:
            callbacks = list(self._subscribers.get(event_type, {}).values())

        for callback in callbacks:
            self._safe_call(event_type, callback, data)

    def subscriber_count(self, event_type: EventType) -> int:
        with self._sub_lock:
            return len(self._subscribers.get(event_type, {}))

    def _safe_call(self, event_type: EventType, callback: Callable, data: Any) -> None:
        """Safely call a callback function"""
        try:
            callback(data)
        except Exception as e:
            # Avoid loop: Do not use publish to report error events
            logger.error("Event callback for %s raised: %s", event_type.value, e)

    def clear(self) -> None:
        """Clear all subscriptions"""
        with self._sub_lock:
            self._subscribers.clear()
