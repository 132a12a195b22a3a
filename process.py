#!python

import pandas as pd
import re
import sys
from argparse import ArgumentParser, FileType

_trace_line = re.compile(r"Time (\d+): (?:(Context)|(No Process)|Running (.+) at voltage (\S+))$")

columns = ["tick", "state", "task", "voltage"]


def parse_trace(lines) -> pd.DataFrame:
    """
    Build a data frame from the trace lines. Lines that are not trace lines are skipped.
    :param lines: iterable of trace lines
    :return: data frame with tick, state, task and voltage columns
    """
    rows = []
    for line in lines:
        match = _trace_line.match(line.strip())
        if not match:
            continue
        tick, context, idle, task, voltage = match.groups()
        if context:
            rows.append((int(tick), "context", None, None))
        elif idle:
            rows.append((int(tick), "idle", None, None))
        else:
            rows.append((int(tick), "running", task, float(voltage)))
    df = pd.DataFrame(rows, columns=columns)
    df["voltage"] = pd.to_numeric(df["voltage"])
    return df


def state_table(df: pd.DataFrame) -> pd.DataFrame:
    """ Ticks spent in each state """
    return df.groupby("state").size().to_frame("ticks")


def task_table(df: pd.DataFrame) -> pd.DataFrame:
    """ Executed ticks and mean voltage of each task """
    running = df[df["state"] == "running"]
    return running.groupby("task").agg(ticks=("tick", "size"), first=("tick", "min"), last=("tick", "max"),
                                       voltage=("voltage", "mean"))


def get_args(argv=None):
    """ Command line arguments """
    parser = ArgumentParser(description="Summarize a simulation trace.")
    parser.add_argument("file", nargs="?", default=sys.stdin, type=FileType('r'), help="File with the trace.")
    return parser.parse_args(argv)


def main(argv=None):
    args = get_args(argv)

    df = parse_trace(args.file)
    if df.empty:
        print("No trace lines found.", file=sys.stderr)
        sys.exit(1)

    print(state_table(df).to_markdown())
    print()
    print(task_table(df).to_markdown())


if __name__ == '__main__':
    main()
