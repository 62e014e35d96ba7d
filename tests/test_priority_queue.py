import random

import pytest

from priority_queue import EmptyQueueError, PriorityQueue, QueueEntry


def drain(queue: PriorityQueue) -> list[QueueEntry]:
    out = []
    while not queue.is_empty():
        out.append(queue.dequeue())
    return out


def test_new_queue_is_empty():
    queue = PriorityQueue()
    assert queue.is_empty()
    assert len(queue) == 0


def test_dequeue_empty_raises():
    queue = PriorityQueue()
    with pytest.raises(EmptyQueueError):
        queue.dequeue()
    with pytest.raises(EmptyQueueError):
        queue.peek()
    # still an IndexError for callers that catch the broad case
    with pytest.raises(IndexError):
        queue.dequeue()


def test_dequeue_returns_minimum_first():
    queue = PriorityQueue()
    queue.enqueue("C", 7)
    queue.enqueue("A", 1)
    queue.enqueue("B", 3)

    assert queue.peek() == QueueEntry("A", 1)
    assert len(queue) == 3
    assert [entry.node for entry in drain(queue)] == ["A", "B", "C"]


@pytest.mark.parametrize("n", [0, 1, 2, 5, 64, 257])
def test_drain_is_non_decreasing(n):
    rng = random.Random(n)
    queue = PriorityQueue()
    distances = [rng.randint(0, 20) for _ in range(n)]
    for i, d in enumerate(distances):
        queue.enqueue(f"n{i}", d)

    out = [entry.distance for entry in drain(queue)]
    assert out == sorted(distances)


def test_duplicate_nodes_are_kept():
    queue = PriorityQueue()
    queue.enqueue("A", 10)
    queue.enqueue("A", 4)

    assert len(queue) == 2
    assert drain(queue) == [QueueEntry("A", 4), QueueEntry("A", 10)]


def test_queue_reusable_after_draining():
    queue = PriorityQueue()
    queue.enqueue("A", 2)
    queue.dequeue()
    assert queue.is_empty()

    queue.enqueue("B", 1)
    assert queue.dequeue() == QueueEntry("B", 1)


def test_equal_children_prefer_left():
    queue = PriorityQueue()
    queue.enqueue("root", 0)
    queue.enqueue("left", 5)
    queue.enqueue("right", 5)
    queue.enqueue("leaf", 9)

    assert [entry.node for entry in drain(queue)] == ["root", "left", "right", "leaf"]
