from __future__ import annotations

"""Tiny pub/sub event bus and utterance completion handles."""

import threading
from typing import Any, Callable, Dict, List, Optional


class EventBus:
    def __init__(self) -> None:
        self._subs: Dict[str, List[Callable[[Any], None]]] = {}

    def subscribe(self, event: str, handler: Callable[[Any], None]) -> None:
        self._subs.setdefault(event, []).append(handler)

    def emit(self, event: str, payload: Any) -> None:
        for h in list(self._subs.get(event, [])):
            h(payload)


class UtteranceEvents:
    """Start/finish notifications for one spoken passage.

    The speech layer calls ``mark_started`` and ``mark_finished`` from any
    thread; callers wait or poll. Finishing implies starting, so a waiter
    never sees "finished" without "started" having fired first.
    """

    def __init__(self, text: str, bus: Optional[EventBus] = None) -> None:
        self.text = text
        self.started = threading.Event()
        self.finished = threading.Event()
        self._bus = bus
        self._lock = threading.Lock()

    def mark_started(self) -> None:
        with self._lock:
            if self.started.is_set():
                return
            self.started.set()
        if self._bus is not None:
            self._bus.emit("utterance_started", self.text)

    def mark_finished(self) -> None:
        self.mark_started()
        with self._lock:
            if self.finished.is_set():
                return
            self.finished.set()
        if self._bus is not None:
            self._bus.emit("utterance_finished", self.text)

    @property
    def speaking(self) -> bool:
        return self.started.is_set() and not self.finished.is_set()

    def wait_started(self, timeout: Optional[float] = None) -> bool:
        return self.started.wait(timeout)

    def wait_finished(self, timeout: Optional[float] = None) -> bool:
        return self.finished.wait(timeout)
