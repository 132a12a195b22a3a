"""
Workload file loader.

The first line is a header and is ignored. Every other non blank line is either
a task:

    T1: (0, 3, 5, 1)        -> arrival, computation, relative deadline, context switch cost

or the (optional) list of selectable processor speeds:

    Possible speeds: (0.25, 0.5, 0.75, 1.0)
"""
from typing import Iterable, TextIO
import math
import re

from resources.WorkloadExceptions import WorkloadIOException, MissingSeparatorException, \
    NonNumericFieldException, FieldRangeException
from utils.queues import ArrivalQueue, new_task

SPEEDS_KEY = "Possible speeds"

# Field name, minimum and maximum value, in file order.
task_fields = [("arrival", 0, 0xFFFF), ("computation", 1, 0xFFFF), ("deadline", 0, 0xFFFF), ("context", 0, 0xFF)]

_unsigned = re.compile(r"[0-9]+")


def split_line(lineno: int, line: str):
    """
    Split a workload line into its identifier and its fields
    :param lineno: line number (1-based)
    :param line: stripped line
    :return: (identifier, list of fields)
    """
    key, sep, args = line.partition(":")
    if not sep:
        raise MissingSeparatorException(lineno, line, "missing ':'")

    args = args.strip()
    if not (args.startswith("(") and args.endswith(")")):
        raise MissingSeparatorException(lineno, line, "arguments must be enclosed in '(' and ')'")

    return key.strip(), [field.strip() for field in args[1:-1].split(",")]


def parse_task_line(lineno: int, line: str) -> dict:
    """
    Parse a task line
    :param lineno: line number (1-based)
    :param line: stripped line
    :return: task
    """
    name, fields = split_line(lineno, line)

    if len(fields) != len(task_fields):
        raise MissingSeparatorException(lineno, line, "expected {:d} fields separated by ',', found {:d}".format(
            len(task_fields), len(fields)))

    values = []
    for field, (field_name, minimum, maximum) in zip(fields, task_fields):
        if not _unsigned.fullmatch(field):
            raise NonNumericFieldException(lineno, line, field)
        value = int(field)
        if not minimum <= value <= maximum:
            raise FieldRangeException(lineno, line, field_name, value, minimum, maximum)
        values.append(value)

    return new_task(name, *values)


def parse_speeds_line(lineno: int, line: str) -> list:
    """
    Parse the processor speeds line
    :param lineno: line number (1-based)
    :param line: stripped line
    :return: list of speeds, in file order
    """
    _, fields = split_line(lineno, line)

    if fields == [""]:
        raise MissingSeparatorException(lineno, line, "no speeds found")

    speeds = []
    for field in fields:
        try:
            speed = float(field)
        except ValueError:
            raise NonNumericFieldException(lineno, line, field) from None
        # float() also takes nan and inf
        if not math.isfinite(speed):
            raise NonNumericFieldException(lineno, line, field)
        speeds.append(speed)

    return speeds


def parse_workload(lines: Iterable[str]):
    """
    Parse the lines of a workload description
    :param lines: iterable of lines, the first one is the header
    :return: (arrival queue, list of speeds or None)
    """
    arrivals = ArrivalQueue()
    speeds = None

    for lineno, line in enumerate(lines, 1):
        # header
        if lineno == 1:
            continue

        line = line.strip()
        if not line:
            continue

        if line.partition(":")[0].strip() == SPEEDS_KEY:
            speeds = parse_speeds_line(lineno, line)
            continue

        arrivals.push(parse_task_line(lineno, line))

    return arrivals, speeds


def load_workload(file: TextIO) -> dict:
    """
    Retrieve the workload from an open file
    :param file: file object handle
    :return: workload
    """
    arrivals, speeds = parse_workload(file)
    return {"id": getattr(file, "name", "<stream>"), "arrivals": arrivals, "speeds": speeds}


def load_from_file(filename: str) -> dict:
    """
    Retrieve the workload from a file. The whole file is read before parsing.
    :param filename: path of the workload file
    :return: workload
    """
    try:
        with open(filename, "r") as file:
            lines = file.readlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise WorkloadIOException(filename, exc) from exc

    arrivals, speeds = parse_workload(lines)
    return {"id": filename, "arrivals": arrivals, "speeds": speeds}
