from __future__ import annotations

import heapq
from dataclasses import dataclass, field

from .actions import ResolveAction


@dataclass(order=True)
class ScheduledTask:
    due_ms: int
    seq: int
    action: ResolveAction = field(compare=False)


class Scheduler:
    """Delayed resolutions, run in (due time, insertion) order.

    Time is supplied by the caller, so the same scheduler is driven by the
    frame loop in the client and by hand in tests.
    """

    def __init__(self) -> None:
        self._heap: list[ScheduledTask] = []
        self._seq = 0

    def __len__(self) -> int:
        return len(self._heap)

    def schedule(self, now_ms: int, delay_ms: int, action: ResolveAction) -> ScheduledTask:
        task = ScheduledTask(due_ms=now_ms + max(0, delay_ms), seq=self._seq, action=action)
        self._seq += 1
        heapq.heappush(self._heap, task)
        return task

    def next_due(self) -> int | None:
        return self._heap[0].due_ms if self._heap else None

    def pop_due(self, now_ms: int) -> list[ScheduledTask]:
        due: list[ScheduledTask] = []
        while self._heap and self._heap[0].due_ms <= now_ms:
            due.append(heapq.heappop(self._heap))
        return due
