from __future__ import annotations

import pathlib
import sys

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1]))

from schedulers.EDF_VS_mono import SchedulerState, queue_tasks, context_handler, process_task, EDF_VS_mono, \
    CONTEXT, IDLE, RUNNING
from utils.cpu import Cpu
from utils.queues import ArrivalQueue, ReadyQueue, new_task


def test_initial_state():
    state = SchedulerState()
    assert state.voltage == 1.0
    assert state.context == 0
    assert state.last_task is None


def test_queue_tasks_admits_arrivals_of_the_tick_only():
    arrivals = ArrivalQueue([new_task("A", 0, 1, 10, 0), new_task("B", 0, 1, 20, 0), new_task("C", 1, 1, 10, 0)])
    ready = ReadyQueue()

    state = queue_tasks(arrivals, ready, SchedulerState(), 0)

    assert [task["id"] for task in ready] == ["A", "B"]
    assert arrivals.peek_time() == 1
    # last admitted ratio wins: demand 2, windows 10 and 20
    assert state.voltage == 2 / 10


def test_queue_tasks_rejects_silently_and_keeps_voltage():
    arrivals = ArrivalQueue([new_task("big", 0, 9, 5, 0)])
    ready = ReadyQueue()
    rejected = []

    state = queue_tasks(arrivals, ready, SchedulerState(), 0, on_reject=lambda task, t, u: rejected.append(task["id"]))

    assert len(ready) == 0
    assert len(arrivals) == 0
    assert rejected == ["big"]
    assert state.voltage == 1.0


def test_queue_tasks_absolute_deadline():
    arrivals = ArrivalQueue([new_task("A", 3, 1, 10, 0)])
    ready = ReadyQueue()
    queue_tasks(arrivals, ready, SchedulerState(), 3)
    assert ready.pop()[1] == 13


def test_queue_tasks_with_speed_table():
    arrivals = ArrivalQueue([new_task("A", 0, 2, 10, 0)])
    state = queue_tasks(arrivals, ReadyQueue(), SchedulerState(), 0, Cpu([0.1, 0.5, 1.0]))
    assert state.voltage == 0.5


def test_phases_do_not_modify_their_input_state():
    state = SchedulerState()
    ready = ReadyQueue()
    ready.push(new_task("A", 0, 2, 10, 3), 10)

    new_state = context_handler(state, ready)

    assert new_state is not state
    assert state.context == 0
    assert state.last_task is None
    assert new_state.context == 3


def test_context_handler_first_task():
    ready = ReadyQueue()
    ready.push(new_task("A", 0, 2, 10, 3), 10)

    state = context_handler(SchedulerState(), ready)
    assert (state.context, state.last_task, state.last_context, state.last_computation) == (3, "A", 3, 2)

    state = context_handler(SchedulerState(), ready, initial_context=False)
    assert (state.context, state.last_task) == (0, "A")


def test_context_handler_empty_queue():
    state = SchedulerState()
    assert context_handler(state, ReadyQueue()) is state


def test_context_handler_preemption():
    state = SchedulerState()
    state.last_task, state.last_context, state.last_computation, state.context = "A", 2, 3, 0
    ready = ReadyQueue()
    ready.push(new_task("B", 2, 2, 12, 1), 14)

    state = context_handler(state, ready)

    assert state.context == 2 + 1
    assert (state.last_task, state.last_context, state.last_computation) == ("B", 1, 2)


def test_context_handler_after_completion():
    state = SchedulerState()
    state.last_task, state.last_context, state.last_computation, state.context = "A", 2, 0, 2
    ready = ReadyQueue()
    ready.push(new_task("B", 2, 2, 12, 1), 14)

    state = context_handler(state, ready)

    assert state.context == 2 + 1
    assert state.last_task == "B"


def test_context_handler_same_task():
    state = SchedulerState()
    state.last_task, state.last_context, state.last_computation, state.context = "A", 2, 4, 0
    ready = ReadyQueue()
    ready.push(new_task("A", 0, 5, 12, 2), 12)

    state = context_handler(state, ready)

    assert state.context == 0
    assert state.last_computation == 4


def test_process_task_context_tick():
    state = SchedulerState()
    state.context = 2
    ready = ReadyQueue()
    ready.push(new_task("A", 0, 2, 10, 0), 10)

    state, event = process_task(ready, state, 7)

    assert event == (7, CONTEXT, None, None)
    assert state.context == 1
    assert ready.peek()["rem"] == 2


def test_process_task_idle():
    state, event = process_task(ReadyQueue(), SchedulerState(), 4)
    assert event == (4, IDLE, None, None)


def test_process_task_runs_and_requeues():
    state = SchedulerState()
    state.voltage = 0.5
    ready = ReadyQueue()
    ready.push(new_task("A", 0, 2, 10, 1), 10)

    state, event = process_task(ready, state, 0)

    assert event == (0, RUNNING, "A", 0.5)
    assert ready.peek()["rem"] == 1
    assert state.last_computation == 1
    assert state.context == 0


def test_process_task_completion_charges_context():
    state = SchedulerState()
    ready = ReadyQueue()
    ready.push(new_task("A", 0, 1, 10, 4), 10)

    state, event = process_task(ready, state, 0)

    assert event[1] == RUNNING
    assert len(ready) == 0
    assert state.context == 4
    assert state.last_computation == 0


def test_scheduler_does_not_consume_the_workload():
    arrivals = ArrivalQueue([new_task("A", 0, 2, 10, 0)])

    for _ in range(2):
        scheduler = EDF_VS_mono(arrivals)
        events = [scheduler.schedule(t) for t in range(4)]
        assert [kind for _, kind, _, _ in events] == [RUNNING, RUNNING, IDLE, IDLE]

    assert len(arrivals) == 1
    assert next(iter(arrivals))["rem"] == 2


def test_scheduler_records_admissions_and_rejections():
    reported = []
    arrivals = ArrivalQueue([new_task("ok", 0, 1, 10, 0), new_task("late", 1, 50, 10, 0)])
    scheduler = EDF_VS_mono(arrivals, on_reject=lambda task, t, u: reported.append((task["id"], t)))

    for t in range(3):
        scheduler.schedule(t)

    assert [task_id for _, task_id, _ in scheduler.admitted] == ["ok"]
    assert [(t, task_id) for t, task_id, _ in scheduler.rejected] == [(1, "late")]
    assert reported == [("late", 1)]


def test_rejected_task_is_the_workload_task():
    big = new_task("T", 0, 50, 10, 0)
    small = new_task("T", 0, 1, 10, 0)
    scheduler = EDF_VS_mono(ArrivalQueue([small, big]))

    scheduler.schedule(0)

    assert len(scheduler.rejected_tasks) == 1
    assert scheduler.rejected_tasks[0] is big
    assert small["rem"] == 1
