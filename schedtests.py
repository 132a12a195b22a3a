import itertools
import math


def demand(ready, candidate: dict) -> int:
    """
    Processor demand of the ready tasks plus the candidate. Each task is charged
    its remaining computation and two context switches (in and out).
    :param ready: iterable of ready tasks
    :param candidate: arriving task
    :return: demand, in ticks
    """
    return sum(task["rem"] + 2 * task["CS"] for task in itertools.chain(ready, [candidate]))


def window_ratio(total: int, window: int) -> float:
    """ demand / window. An empty window needs an infinite speed; a negative one gives a negative ratio. """
    if window == 0:
        return math.inf
    return total / window


def utilization(ready, candidate: dict, t: int, cpu=None) -> float:
    """
    Least upper bound utilization U(t) = max_j demand / (D_j - t), over the ready
    tasks and the candidate. D_j is the relative deadline of task j.

    If a cpu with speed levels is given, the first level (in table order) greater
    than U(t) is returned instead.
    :param ready: iterable of ready tasks
    :param candidate: arriving task
    :param t: current time
    :param cpu: optional Cpu
    :return: utilization ratio (or selected speed)
    """
    ready = list(ready)
    total = demand(ready, candidate)

    u = window_ratio(total, candidate["D"] - t)
    for task in ready:
        u_j = window_ratio(total, task["D"] - t)
        if u_j > u:
            u = u_j

    if cpu is not None:
        return cpu.select_speed(u)

    return u


def utilization_test(ready, candidate: dict, t: int, cpu=None):
    """
    Admission test for an arriving task
    :return: (admitted, utilization ratio)
    """
    u = utilization(ready, candidate, t, cpu)
    return u <= 1.0, u
