"""Command-line entry point for sampling regular bipartite graphs.

Usage:
    bigs -n 10 -m 6 -v 3 -c 5
    bigs -n 10 -m 6 -v 3 -c 5 --rngseed 42 --output graph.json
    bigs -n 1000000 -m 1000000 -v 3 -c 3 --output big.json --verbose
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from bigs.config import InvalidParametersError, SamplerConfig, config_hash
from bigs.graph import BipartiteGraph, Sampler, save_graph
from bigs.reproducibility import make_rng, resolve_seed

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bigs",
        description="The BIpartite Graph Sampler: random regular bipartite graphs",
    )
    parser.add_argument(
        "-v",
        "--vardegree",
        type=int,
        default=3,
        help="Number of constraints connected to each variable (default: 3)",
    )
    parser.add_argument(
        "-c",
        "--constdegree",
        type=int,
        default=3,
        help="Number of variables connected to each constraint (default: 3)",
    )
    parser.add_argument(
        "-n",
        "--numvar",
        type=int,
        default=3,
        help="Number of variables in the graph (default: 3)",
    )
    parser.add_argument(
        "-m",
        "--numconst",
        type=int,
        default=3,
        help="Number of constraints in the graph (default: 3)",
    )
    parser.add_argument(
        "-r",
        "--rngseed",
        type=int,
        default=None,
        help="Seed for the random number generator. A random seed is used "
        "if omitted; the same seed and version always give the same graph",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Save the result as JSON at this path instead of printing it",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable DEBUG-level logging",
    )
    return parser


def format_summary(
    graph: BipartiteGraph, config: SamplerConfig, seed: int
) -> str:
    """Human-readable report of a sampled graph, one adjacency row per variable."""
    lines = [
        "Random graph",
        "============",
        "",
        f"Number of variables: {config.n}",
        f"Number of constraints: {config.m}",
        f"Variable degree: {config.v}",
        f"Constraint degree: {config.c}",
        f"Rng seed: {seed}",
        f"Config hash: {config_hash(config)}",
        "",
        "Graph",
        "-----",
    ]
    for variable, row in enumerate(graph.variable_adjacency.tolist()):
        lines.append(f"{variable}: {' '.join(str(c) for c in row)}")
    return "\n".join(lines)


def report_invalid_parameters(error: InvalidParametersError) -> None:
    print(f"Can't build a regular graph: {error}", file=sys.stderr)
    print(f"n = {error.n} (number of variables)", file=sys.stderr)
    print(f"v = {error.v} (variable's degree)", file=sys.stderr)
    print(f"m = {error.m} (number of constraints)", file=sys.stderr)
    print(f"c = {error.c} (constraint's degree)", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, sample one graph and print or save it.

    Returns:
        Process exit status: 0 on success, 1 on invalid parameters or failure.
    """
    args = build_parser().parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = SamplerConfig(
            n=args.numvar, m=args.numconst, v=args.vardegree, c=args.constdegree
        )
    except InvalidParametersError as e:
        report_invalid_parameters(e)
        return 1

    try:
        seed = resolve_seed(args.rngseed)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    log.info("Seed: %d", seed)

    try:
        t0 = time.monotonic()
        graph = Sampler(config).sample(make_rng(seed))
        log.info("Sampled in %.2fs", time.monotonic() - t0)

        if args.output is not None:
            path = save_graph(graph, config, Path(args.output), seed=seed)
            print(f"Saved output to {path}")
        else:
            print(format_summary(graph, config, seed))
    except Exception:
        log.exception("Sampling failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
