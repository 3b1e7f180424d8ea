from .config import HierarchyConfig
from .data_structures.mem_levels import CacheLevel
from .hierarchy import iter_levels
from .simulator import MemoryHierarchySimulator
from .stats import format_stats, format_access_log
from .trace_parser import TraceParser
import argparse
import logging
import os
import sys


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Cache hierarchy simulator runner"
    )
    parser.add_argument(
        "-c", "--config",
        default="hierarchy.config",
        help="Path to config file (default: %(default)s)",
    )
    parser.add_argument(
        "-t", "--trace",
        default="-",  # default to stdin, not a hardcoded file
        help='Trace file path (use "-" or omit to read from stdin; default: "%(default)s")',
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for Random replacement policies (overrides the config file)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log every miss, fill and write-back",
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "-v", "--verbose",
        dest="verbose",
        action="store_true",
        help="Enable verbose output (default)",
    )
    group.add_argument(
        "-q", "--quiet",
        dest="verbose",
        action="store_false",
        help="Quiet mode (only print aggregated stats)",
    )
    parser.set_defaults(verbose=True)
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING,
                        format="%(levelname)s: %(message)s")

    use_stdin = (args.trace == "-")

    # validation
    if not os.path.exists(args.config):
        print(f"error: config file not found: {args.config}", file=sys.stderr)
        sys.exit(2)

    if not use_stdin and not os.path.exists(args.trace):
        print(f"error: trace file not found: {args.trace}", file=sys.stderr)
        sys.exit(2)

    try:
        hierarchy_config = HierarchyConfig.from_config_file(args.config)
    except ValueError as e:
        print(f"error: bad config file {args.config}: {e}", file=sys.stderr)
        sys.exit(2)
    if args.verbose:
        print(hierarchy_config)

    trace_path = "/dev/stdin" if use_stdin else args.trace
    simulator = MemoryHierarchySimulator.from_config(hierarchy_config, seed=args.seed)
    run = simulator.run(TraceParser(trace_path))

    if args.verbose:
        print(format_access_log(run.results, run.addresses))
    print(format_stats(run.results, hierarchy_config.hierarchy))
    for level in iter_levels(simulator.top_level):
        if isinstance(level, CacheLevel):
            print(level)


if __name__ == '__main__':
    main()
