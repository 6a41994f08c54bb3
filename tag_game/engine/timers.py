"""
Timers & Input
==============
Orologi periodici e sorgenti di input che il motore acquisisce quando un
round entra in gioco e rilascia quando ne esce.

Le implementazioni "manuali" usano un tempo virtuale e servono per i test
e per il simulatore; la finestra pygame fornisce le proprie (vedi tag_game.view).
"""

from typing import Callable, List, Optional
from dataclasses import dataclass


TickCallback = Callable[[], None]
KeyListener = Callable[[str], None]


class TimerHandle:
    """Handle di un timer periodico. cancel() è idempotente."""

    def __init__(self, on_cancel: Optional[Callable[['TimerHandle'], None]] = None):
        self._on_cancel = on_cancel
        self.cancelled = False

    def cancel(self):
        if self.cancelled:
            return
        self.cancelled = True
        if self._on_cancel:
            self._on_cancel(self)


class Clock:
    """Interfaccia di un orologio che richiama una funzione a intervalli fissi."""

    def schedule_interval(self, interval_ms: int, callback: TickCallback) -> TimerHandle:
        raise NotImplementedError


class InputSource:
    """Interfaccia di una sorgente di eventi tastiera."""

    def add_listener(self, listener: KeyListener):
        raise NotImplementedError

    def remove_listener(self, listener: KeyListener):
        raise NotImplementedError


@dataclass
class _Scheduled:
    handle: TimerHandle
    interval_ms: int
    callback: TickCallback
    next_fire_ms: int


class ManualClock(Clock):
    """Orologio a tempo virtuale: il tempo avanza solo con advance()."""

    def __init__(self):
        self.now_ms = 0
        self._timers: List[_Scheduled] = []

    def schedule_interval(self, interval_ms: int, callback: TickCallback) -> TimerHandle:
        if interval_ms <= 0:
            raise ValueError(f"Intervallo non valido: {interval_ms}")
        handle = TimerHandle(self._remove)
        self._timers.append(_Scheduled(
            handle=handle,
            interval_ms=interval_ms,
            callback=callback,
            next_fire_ms=self.now_ms + interval_ms
        ))
        return handle

    def _remove(self, handle: TimerHandle):
        self._timers = [t for t in self._timers if t.handle is not handle]

    @property
    def active_timers(self) -> int:
        return len(self._timers)

    def advance(self, ms: int):
        """Avanza il tempo, eseguendo in ordine ogni scadenza nell'intervallo."""
        target = self.now_ms + ms
        while True:
            due = [t for t in self._timers if t.next_fire_ms <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.next_fire_ms)
            self.now_ms = timer.next_fire_ms
            timer.next_fire_ms += timer.interval_ms
            timer.callback()
        self.now_ms = target


class ManualInput(InputSource):
    """Sorgente di input programmabile: press() consegna un tasto ai listener."""

    def __init__(self):
        self.listeners: List[KeyListener] = []

    def add_listener(self, listener: KeyListener):
        if listener not in self.listeners:
            self.listeners.append(listener)

    def remove_listener(self, listener: KeyListener):
        if listener in self.listeners:
            self.listeners.remove(listener)

    def press(self, key: str):
        for listener in list(self.listeners):
            listener(key)
