"""
Time ordered task queues.

A task is a dict with the following keys:

    id:     identifier (not required to be unique)
    a:      arrival time
    C:      computation (total units)
    D:      relative deadline
    CS:     context switch cost
    rem:    remaining computation

Both queues are binary heaps. Every entry carries a sequence number taken at
insertion time, so entries with the same key pop in insertion order and the
tasks themselves are never compared.
"""
import heapq
import itertools


def new_task(name: str, a: int, c: int, d: int, cs: int) -> dict:
    return {"id": name, "a": a, "C": c, "D": d, "CS": cs, "rem": c}


class ArrivalQueue:
    """
    Tasks ordered by arrival time. Tasks arriving at the same time keep the
    order in which they were pushed (file order when built by the loader).
    """

    def __init__(self, tasks=()):
        self._heap = []
        self._seq = itertools.count()
        for task in tasks:
            self.push(task)

    def push(self, task: dict) -> None:
        heapq.heappush(self._heap, (task["a"], next(self._seq), task))

    def peek_time(self):
        """
        Arrival time of the next task
        :return: arrival time, or None if the queue is empty
        """
        if self._heap:
            return self._heap[0][0]
        return None

    def pop(self) -> dict:
        return heapq.heappop(self._heap)[2]

    def __iter__(self):
        return (task for _, _, task in sorted(self._heap))

    def __len__(self):
        return len(self._heap)

    def __eq__(self, other):
        if not isinstance(other, ArrivalQueue):
            return NotImplemented
        return list(self) == list(other)


class ReadyQueue:
    """
    EDF ready queue. Min-heap keyed by (absolute deadline, insertion sequence).
    """

    def __init__(self):
        self._heap = []
        self._seq = itertools.count()

    def push(self, task: dict, deadline: int, seq=None) -> None:
        """
        Insert a task. A task pushed back with the sequence number it was popped
        with keeps its place among the tasks with the same deadline.
        :param task: task
        :param deadline: absolute deadline
        :param seq: sequence number, a new one if None
        """
        if seq is None:
            seq = next(self._seq)
        heapq.heappush(self._heap, (deadline, seq, task))

    def peek(self):
        """
        Task with the earliest absolute deadline, without removing it
        :return: task, or None if the queue is empty
        """
        if self._heap:
            return self._heap[0][2]
        return None

    def pop(self):
        """
        Remove the task with the earliest absolute deadline
        :return: (task, absolute deadline, sequence number)
        """
        deadline, seq, task = heapq.heappop(self._heap)
        return task, deadline, seq

    def __iter__(self):
        return (task for _, _, task in sorted(self._heap))

    def __len__(self):
        return len(self._heap)
