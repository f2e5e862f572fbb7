# pharma_core/common/events.py
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List

from django.db import transaction

logger = logging.getLogger(__name__)

Handler = Callable[[Dict[str, Any]], None]

_registry: Dict[str, List[Handler]] = defaultdict(list)


def subscribe(event_name: str):
    """
    Decorator to register an event handler.
    Usage:
        @subscribe("redistribution.completed")
        def handler(payload): ...
    """
    def _decorator(fn: Handler) -> Handler:
        _registry[event_name].append(fn)
        return fn
    return _decorator


def publish(event_name: str, payload: Dict[str, Any]) -> None:
    """
    Deliver an event to in-process subscribers.

    Subscribers are notification sinks: a failing handler is logged and skipped,
    it never changes the outcome of the operation that published the event.
    """
    for handler in _registry.get(event_name, []):
        try:
            handler(payload)
        except Exception:
            logger.warning(
                "event_handler_failed event=%s handler=%s",
                event_name,
                getattr(handler, "__name__", repr(handler)),
                exc_info=True,
            )


def publish_on_commit(event_name: str, payload: Dict[str, Any]) -> None:
    """
    Publish once the surrounding transaction commits (immediately if none).
    Keep payloads ID-based to avoid cross-app imports.
    """
    transaction.on_commit(lambda: publish(event_name, payload))


def clear_subscribers(event_name: str | None = None) -> None:
    if event_name is None:
        _registry.clear()
    else:
        _registry.pop(event_name, None)
