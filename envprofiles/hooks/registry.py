"""Registry of lifecycle hook callbacks.

The host application registers callbacks for ``(action, phase)`` pairs
at startup. Running a pair with nothing registered is a silent no-op.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from .models import HookAction
from .models import HookCallback
from .models import HookEvent
from .models import HookPhase

logger = logging.getLogger(__name__)


class HookRegistry:
    """Maps ``(action, phase)`` to the callbacks registered for it.

    Attributes:
        stats: Per-hook call, error and duration counters, keyed by ``action_phase``
    """

    def __init__(self) -> None:
        self._callbacks: dict[tuple[HookAction, HookPhase], list[HookCallback]] = {}
        self.stats: dict[str, dict[str, Any]] = {}

    def register(self, action: HookAction | str, phase: HookPhase | str, callback: HookCallback) -> None:
        """Register ``callback`` to run for ``action`` in ``phase``.

        Raises:
            ValueError: If action or phase is not a known value
        """
        key = (HookAction(action), HookPhase(phase))
        self._callbacks.setdefault(key, []).append(callback)
        logger.debug(f"Registered hook {key[0].value}_{key[1].value}: {callback!r}")

    def on(self, action: HookAction | str, phase: HookPhase | str):
        """Decorator form of :meth:`register`.

        Example:
            >>> hooks = HookRegistry()
            >>> @hooks.on("create", "post")
            ... def announce(event):
            ...     print(f"created {event.profile}")
        """

        def decorator(callback: HookCallback) -> HookCallback:
            self.register(action, phase, callback)
            return callback

        return decorator

    def unregister(self, action: HookAction | str, phase: HookPhase | str, callback: HookCallback) -> bool:
        """Remove a callback. Returns True if it was registered."""
        callbacks = self._callbacks.get((HookAction(action), HookPhase(phase)), [])
        if callback in callbacks:
            callbacks.remove(callback)
            return True
        return False

    def has(self, action: HookAction | str, phase: HookPhase | str) -> bool:
        return bool(self._callbacks.get((HookAction(action), HookPhase(phase))))

    def run(self, event: HookEvent) -> None:
        """Invoke every callback registered for the event's action and phase.

        Failures are logged and counted; they never interrupt the action.
        """
        callbacks = self._callbacks.get((event.action, event.phase))
        if not callbacks:
            return

        stats = self.stats.setdefault(event.key, {"calls": 0, "errors": 0, "total_duration_ms": 0.0})
        for callback in list(callbacks):
            start = time.perf_counter()
            stats["calls"] += 1
            try:
                callback(event)
            except Exception as e:
                stats["errors"] += 1
                logger.warning(f"Hook {event.key} failed: {e}", exc_info=True)
            finally:
                stats["total_duration_ms"] += (time.perf_counter() - start) * 1000

    def dispatch(
        self,
        action: HookAction | str,
        phase: HookPhase | str,
        profile: str | None = None,
        path=None,
    ) -> None:
        """Build an event and run it."""
        self.run(HookEvent(action=HookAction(action), phase=HookPhase(phase), profile=profile, path=path))
