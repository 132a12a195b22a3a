from argparse import ArgumentParser
import sys

from simulations.simulator import DEFAULT_HORIZON


def get_args(argv=None):
    """ Command line arguments """
    parser = ArgumentParser(description="Simulate an EDF scheduler with admission control, context switch "
                                        "overhead and voltage scaling.")
    parser.add_argument("file", type=str, help="Workload file.")
    parser.add_argument("--horizon", type=int, default=DEFAULT_HORIZON, help="Number of ticks to simulate.")
    parser.add_argument("--no-initial-context", action="store_true",
                        help="Do not charge the context switch cost of the first task.")
    parser.add_argument("--show-tasks", action="store_true", help="Show the workload tasks.")
    parser.add_argument("--show-rejected", action="store_true", help="Report tasks rejected by the admission test.")
    parser.add_argument("--summary", action="store_true", help="Show per task results.")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar.")
    parser.add_argument("--silent", action="store_true", help="Suppress the trace.")
    args = parser.parse_args(argv)
    if args.horizon < 0:
        parser.error("--horizon must be greater or equal than 0")
    return args


def main(argv=None):
    args = get_args(argv)
    from cli import cli
    try:
        sys.exit(cli.run_simulation(args))
    except KeyboardInterrupt:
        sys.exit(1)


if __name__ == '__main__':
    main()
