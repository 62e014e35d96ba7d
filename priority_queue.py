from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, List


class EmptyQueueError(IndexError):
    """Raised when taking an entry from a queue that holds none."""


@dataclass(frozen=True)
class QueueEntry:
    node: Hashable
    distance: float


class PriorityQueue:
    """Binary min-heap of (node, distance) entries.

    The same node may be queued several times; callers that lower a node's
    distance push a new entry and discard the stale ones when they surface.
    """

    def __init__(self) -> None:
        self._heap: List[QueueEntry] = []

    def __len__(self) -> int:
        return len(self._heap)

    def is_empty(self) -> bool:
        return not self._heap

    def enqueue(self, node: Hashable, distance: float) -> None:
        self._heap.append(QueueEntry(node, distance))
        self._sift_up(len(self._heap) - 1)

    def peek(self) -> QueueEntry:
        if not self._heap:
            raise EmptyQueueError("peek from an empty priority queue")
        return self._heap[0]

    def dequeue(self) -> QueueEntry:
        if not self._heap:
            raise EmptyQueueError("dequeue from an empty priority queue")

        minimum = self._heap[0]
        last = self._heap.pop()
        if self._heap:
            self._heap[0] = last
            self._sift_down(0)
        return minimum

    def _sift_up(self, index: int) -> None:
        heap = self._heap
        while index > 0:
            parent = (index - 1) // 2
            if heap[parent].distance <= heap[index].distance:
                break
            heap[parent], heap[index] = heap[index], heap[parent]
            index = parent

    def _sift_down(self, index: int) -> None:
        heap = self._heap
        size = len(heap)
        while True:
            left = 2 * index + 1
            right = left + 1
            smallest = index
            # Left is checked first so it wins ties against the right child.
            if left < size and heap[left].distance < heap[smallest].distance:
                smallest = left
            if right < size and heap[right].distance < heap[smallest].distance:
                smallest = right
            if smallest == index:
                return
            heap[index], heap[smallest] = heap[smallest], heap[index]
            index = smallest
