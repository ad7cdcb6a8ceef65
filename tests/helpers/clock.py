from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable


@dataclass
class _Pending:
    due: float
    seq: int
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualScheduler:
    """Deterministic stand-in for the asyncio scheduler; time moves only via ``advance``."""

    now: float = 0.0
    _pending: list[_Pending] = field(default_factory=list)
    _seq: int = 0

    def call_later(self, delay: float, callback: Callable[[], None]) -> _Pending:
        self._seq += 1
        handle = _Pending(due=self.now + delay, seq=self._seq, callback=callback)
        self._pending.append(handle)
        return handle

    @property
    def pending(self) -> list[_Pending]:
        return [handle for handle in self._pending if not handle.cancelled]

    def advance(self, seconds: float) -> int:
        """Run every callback due within ``seconds``; returns how many ran."""
        target = self.now + seconds
        fired = 0
        while True:
            due = [h for h in self.pending if h.due <= target + 1e-12]
            if not due:
                break
            handle = min(due, key=lambda h: (h.due, h.seq))
            self._pending.remove(handle)
            self.now = max(self.now, handle.due)
            handle.callback()
            fired += 1
        self.now = target
        return fired

    def fire_next(self) -> bool:
        pending = self.pending
        if not pending:
            return False
        handle = min(pending, key=lambda h: (h.due, h.seq))
        self._pending.remove(handle)
        self.now = max(self.now, handle.due)
        handle.callback()
        return True
