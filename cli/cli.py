from resources.workload import load_from_file
from resources.WorkloadExceptions import WorkloadException, WorkloadIOException, MissingSeparatorException, \
    NonNumericFieldException, FieldRangeException
from simulations.simulator import run_sim, format_event, format_voltage
from tabulate import tabulate
from tqdm.auto import tqdm
import numpy as np
import sys

# Exit status and message prefix for each load error.
load_errors = [(WorkloadIOException, 3, "Cannot read workload"),
               (MissingSeparatorException, 4, "Missing separator"),
               (NonNumericFieldException, 5, "Non numeric field"),
               (FieldRangeException, 6, "Field out of range")]


def report_load_error(exc: WorkloadException) -> int:
    """
    Print the load error on stderr
    :param exc: load error
    :return: exit status
    """
    for cls, status, prefix in load_errors:
        if isinstance(exc, cls):
            print("{0}: {1}".format(prefix, exc), file=sys.stderr)
            return status
    print("Invalid workload: {0}".format(exc), file=sys.stderr)
    return 1


def print_tasks(workload):
    """
    Print the workload tasks and the speed levels into stderr.
    :param workload: workload
    :return: None
    """
    tasks = [{"Task": task["id"], "a": task["a"], "C": task["C"], "D": task["D"], "CS": task["CS"]}
             for task in workload["arrivals"]]
    print("Tasks:", file=sys.stderr)
    print(tabulate(tasks, tablefmt="github", headers="keys"), file=sys.stderr)
    if workload["speeds"]:
        print("Speeds: {0}".format(", ".join(format_voltage(s) for s in workload["speeds"])), file=sys.stderr)


def print_rejected(task, t, u):
    print("Rejected {0} at {1} (U={2})".format(task["id"], t, format_voltage(u)), file=sys.stderr)


def print_summary(workload, result):
    """
    Print the per task results of a simulation into stderr.
    :param workload: simulated workload
    :param result: simulation result
    :return: None
    """
    # ids are not unique, match the task objects themselves
    rejected = {id(task) for task in result["rejected_tasks"]}
    rows = []
    for task in workload["arrivals"]:
        if task["a"] >= result["horizon"]:
            status = "not arrived"
        elif id(task) in rejected:
            status = "rejected"
        else:
            status = "admitted"
        rows.append([task["id"], task["a"], task["C"], task["a"] + task["D"], status])

    print("Summary:", file=sys.stderr)
    print(tabulate(rows, headers=["Task", "a", "C", "Abs. D", "Status"], tablefmt="github"), file=sys.stderr)

    executed = sorted(result["executed"].items())
    print(tabulate(executed, headers=["Task", "Executed"], tablefmt="github"), file=sys.stderr)

    print("Running: {0}".format(result["running_ticks"]), file=sys.stderr)
    print("Context: {0}".format(result["context_ticks"]), file=sys.stderr)
    print("Idle: {0}".format(result["idle_ticks"]), file=sys.stderr)
    if result["running_ticks"]:
        print("Mean voltage: {:.4f}".format(np.nanmean(result["voltage"])), file=sys.stderr)


def run_simulation(args) -> int:
    """
    Load the workload, simulate it and print the trace into stdout.
    :param args: command line arguments
    :return: exit status
    """
    try:
        workload = load_from_file(args.file)
    except WorkloadException as exc:
        return report_load_error(exc)

    if args.show_tasks:
        print_tasks(workload)

    params = {
        "horizon": args.horizon,
        "initial_context": not args.no_initial_context,
        "on_reject": print_rejected if args.show_rejected else None,
    }

    if args.progress:
        with tqdm(total=args.horizon, ascii=True, desc="Simulating...", file=sys.stderr) as progress:
            result = run_sim(workload, params, lambda t: progress.update())
    else:
        result = run_sim(workload, params)

    if not args.silent:
        for event in result["trace"]:
            print(format_event(event))

    if args.summary:
        print_summary(workload, result)

    return 0
