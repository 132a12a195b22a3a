from collections import Counter
import numpy as np
from schedulers.EDF_VS_mono import EDF_VS_mono, CONTEXT, IDLE, RUNNING

DEFAULT_HORIZON = 200


def format_voltage(voltage: float) -> str:
    """ Shortest single precision representation of the voltage, without a trailing '.0' """
    return np.format_float_positional(np.float32(voltage), trim='-')


def format_event(event) -> str:
    """
    Trace line of an event
    :param event: (t, kind, task id, voltage)
    :return: trace line
    """
    t, kind, task_id, voltage = event
    if kind == CONTEXT:
        return "Time {}: Context".format(t)
    if kind == IDLE:
        return "Time {}: No Process".format(t)
    return "Time {}: Running {} at voltage {}".format(t, task_id, format_voltage(voltage))


def create_configuration(params: dict = None) -> dict:
    """
    Complete the simulation parameters with their default values
    :param params: horizon, initial_context
    :return: configuration
    """
    configuration = {"horizon": DEFAULT_HORIZON, "initial_context": True, "on_reject": None}
    if params:
        configuration.update({k: v for k, v in params.items() if v is not None})

    if configuration["horizon"] < 0:
        raise ValueError("horizon must be greater or equal than 0, got {}".format(configuration["horizon"]))

    return configuration


def run_sim(workload: dict, params: dict = None, callback=None) -> dict:
    """
    Simulate a workload
    :param workload: workload, as returned by the loader
    :param params: horizon, initial_context, on_reject
    :param callback: called with the current tick after each tick
    :return: simulation result
    """
    cfg = create_configuration(params)

    scheduler = EDF_VS_mono(workload["arrivals"], workload["speeds"], cfg["initial_context"], cfg["on_reject"])

    trace = []
    for t in range(cfg["horizon"]):
        trace.append(scheduler.schedule(t))
        if callback:
            callback(t)

    kinds = Counter(kind for _, kind, _, _ in trace)

    # voltage per tick, nan when nothing runs
    voltage = np.full(len(trace), np.nan)
    for t, kind, _, v in trace:
        if kind == RUNNING:
            voltage[t] = v

    return {
        "workload_id": workload["id"],
        "horizon": cfg["horizon"],
        "trace": trace,
        "admitted": scheduler.admitted,
        "rejected": scheduler.rejected,
        "rejected_tasks": scheduler.rejected_tasks,
        "executed": Counter(task_id for _, kind, task_id, _ in trace if kind == RUNNING),
        "context_ticks": kinds[CONTEXT],
        "idle_ticks": kinds[IDLE],
        "running_ticks": kinds[RUNNING],
        "voltage": voltage,
        "state": scheduler.state,
    }
