from __future__ import annotations
import logging
from typing import Any, Callable, Dict, Optional

log = logging.getLogger(__name__)

EventCallback = Callable[[Dict[str, Any]], None]


class EventEmitter:
    """
    Thin wrapper around an optional on_event callback.

    Events are plain dicts with a "phase" key ("write.done", "read.cache_hit",
    "error", ...) plus phase-specific fields. A failing callback is logged and
    otherwise ignored.
    """
    def __init__(self, callback: Optional[EventCallback] = None) -> None:
        self._cb = callback

    def emit(self, phase: str, **fields: Any) -> None:
        if self._cb is None:
            return
        evt: Dict[str, Any] = {"phase": phase}
        evt.update(fields)
        try:
            self._cb(evt)
        except Exception:
            log.exception("on_event callback failed for phase %s", phase)
