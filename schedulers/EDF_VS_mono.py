"""
Earliest Deadline First with admission control, context switch overhead and
discrete voltage scaling, for uniprocessor architectures.

Every tick runs three phases, in this order:

    1. queue_tasks      admit the tasks arriving now (utilization test) and set the voltage
    2. context_handler  charge context switch ticks when the head of the ready queue changes
    3. process_task     consume a context tick, idle, or run one unit of the head task

The phases receive the SchedulerState and return the updated copy.
"""
import copy

from schedtests import utilization_test
from utils.cpu import Cpu
from utils.queues import ArrivalQueue, ReadyQueue

CONTEXT = "context"
IDLE = "idle"
RUNNING = "running"


class SchedulerState:
    """
    voltage:            current voltage (speed ratio), 1.0 is full speed
    context:            pending context switch ticks
    last_task:          id of the last task seen at the head of the ready queue
    last_context:       its context switch cost
    last_computation:   its remaining computation, as last observed
    """

    def __init__(self, voltage=1.0):
        self.voltage = voltage
        self.context = 0
        self.last_task = None
        self.last_context = None
        self.last_computation = None

    def __repr__(self):
        return "SchedulerState(voltage={}, context={}, last_task={!r}, last_context={}, last_computation={})".format(
            self.voltage, self.context, self.last_task, self.last_context, self.last_computation)


def queue_tasks(arrival_queue: ArrivalQueue, ready_queue: ReadyQueue, state: SchedulerState, t: int,
                cpu: Cpu = None, on_admit=None, on_reject=None) -> SchedulerState:
    """
    Move the tasks arriving at t into the ready queue, if they pass the
    utilization test. The voltage is set to the ratio of the last admitted task.
    Rejected tasks are discarded; on_reject receives the task as popped from
    the arrival queue.
    :param arrival_queue: tasks not yet arrived
    :param ready_queue: EDF ready queue
    :param state: scheduler state
    :param t: current time
    :param cpu: cpu with the available speed levels
    :param on_admit: called as on_admit(task, t, u)
    :param on_reject: called as on_reject(task, t, u)
    :return: updated scheduler state
    """
    state = copy.copy(state)

    while arrival_queue.peek_time() == t:
        task = arrival_queue.pop()

        admitted, u = utilization_test(ready_queue, task, t, cpu)

        if admitted:
            # the ready queue runs its own copy down
            task = dict(task)
            state.voltage = u
            ready_queue.push(task, task["a"] + task["D"])
            if on_admit:
                on_admit(task, t, u)
        elif on_reject:
            on_reject(task, t, u)

    return state


def context_handler(state: SchedulerState, ready_queue: ReadyQueue, initial_context=True) -> SchedulerState:
    """
    Charge the context switch ticks caused by a change of the ready queue head.
    :param state: scheduler state
    :param ready_queue: EDF ready queue
    :param initial_context: charge the context cost of the very first task
    :return: updated scheduler state
    """
    task = ready_queue.peek()
    if task is None:
        return state

    state = copy.copy(state)

    if state.last_task is None:
        # first task ever scheduled
        if initial_context:
            state.context = task["CS"]
    elif state.last_task != task["id"]:
        if state.last_computation > 0:
            # preempted, switch out the previous task and switch in the new one
            state.context += state.last_context + task["CS"]
        else:
            # the previous task already paid its way out when it completed
            state.context += task["CS"]
    else:
        return state

    state.last_task = task["id"]
    state.last_context = task["CS"]
    state.last_computation = task["rem"]

    return state


def process_task(ready_queue: ReadyQueue, state: SchedulerState, t: int):
    """
    Process one tick.
    :param ready_queue: EDF ready queue
    :param state: scheduler state
    :param t: current time
    :return: (updated scheduler state, event), event is (t, kind, task id, voltage)
    """
    state = copy.copy(state)

    if state.context > 0:
        state.context -= 1
        return state, (t, CONTEXT, None, None)

    if not len(ready_queue):
        return state, (t, IDLE, None, None)

    task, deadline, seq = ready_queue.pop()
    task["rem"] -= 1
    state.last_computation = task["rem"]

    if task["rem"] == 0:
        # completed, switch it out before anything else runs
        state.context += task["CS"]
    else:
        ready_queue.push(task, deadline, seq)

    return state, (t, RUNNING, task["id"], state.voltage)


class EDF_VS_mono:
    """
    Holds the queues and the state of one simulation.
    """

    def __init__(self, arrival_queue: ArrivalQueue, speeds=None, initial_context=True, on_reject=None):
        # own copy, the workload can be simulated again
        self.arrival_queue = ArrivalQueue(arrival_queue)
        self.ready_queue = ReadyQueue()
        self.cpu = Cpu(speeds) if speeds else None
        self.state = SchedulerState()
        self.initial_context = initial_context
        self.admitted = []
        self.rejected = []
        self.rejected_tasks = []
        self._on_reject = on_reject

    def on_admit(self, task, t, u):
        self.admitted.append((t, task["id"], u))

    def on_reject(self, task, t, u):
        self.rejected.append((t, task["id"], u))
        self.rejected_tasks.append(task)
        if self._on_reject:
            self._on_reject(task, t, u)

    def schedule(self, t: int):
        """
        Run the three phases for tick t
        :param t: current time
        :return: event
        """
        self.state = queue_tasks(self.arrival_queue, self.ready_queue, self.state, t, self.cpu,
                                 self.on_admit, self.on_reject)
        self.state = context_handler(self.state, self.ready_queue, self.initial_context)
        self.state, event = process_task(self.ready_queue, self.state, t)
        return event
