"""Broadcast cancellation for in-flight requests.

One ``AbortSignal`` may be attached to any number of requests. Aborting it
notifies every listener on its own, so each request fails independently of
the others.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

AbortListener = Callable[[], None]


class AbortSignal:
    """Read side of an ``AbortController``."""

    def __init__(self) -> None:
        self._aborted = False
        self._listeners: list[AbortListener] = []

    @property
    def aborted(self) -> bool:
        return self._aborted

    def add_abort_listener(self, listener: AbortListener) -> None:
        """Call ``listener`` on abort. Check ``aborted`` first; late listeners never fire."""
        if not self._aborted:
            self._listeners.append(listener)

    def remove_abort_listener(self, listener: AbortListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def _dispatch(self) -> None:
        if self._aborted:
            return
        self._aborted = True
        listeners, self._listeners = self._listeners, []
        for listener in listeners:
            try:
                listener()
            except Exception as e:
                logger.error(f"Abort listener failed: {e}", exc_info=True)


class AbortController:
    """Owns one ``AbortSignal`` and triggers it."""

    def __init__(self) -> None:
        self._signal = AbortSignal()

    @property
    def signal(self) -> AbortSignal:
        return self._signal

    def abort(self) -> None:
        """Abort the signal. Repeated calls do nothing."""
        self._signal._dispatch()
