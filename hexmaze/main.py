import argparse
import sys
import time
import logging

from hexmaze.core.errors import MazeError, NoPathFound

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="hexmaze: perfect maze generator and DFS solver")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    gen_parser.add_argument("output_file", help="Where to write the encoded maze")
    gen_parser.add_argument("rows", type=int, help="Number of rows")
    gen_parser.add_argument("cols", type=int, help="Number of columns")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed")

    # Solve Command
    solve_parser = subparsers.add_parser("solve", help="Solve an existing maze")
    solve_parser.add_argument("input_file", help="Path to maze file")
    solve_parser.add_argument("rows", type=int, help="Number of rows")
    solve_parser.add_argument("cols", type=int, help="Number of columns")
    solve_parser.add_argument("output_file", help="Where to write the path")
    solve_parser.add_argument("start_row", type=int)
    solve_parser.add_argument("start_col", type=int)
    solve_parser.add_argument("goal_row", type=int)
    solve_parser.add_argument("goal_col", type=int)
    solve_parser.add_argument("--mode", type=str, default="pruned", choices=["full", "pruned"],
                              help="full: every visit incl. backtracking, pruned: final path only")

    # Inspect Command
    inspect_parser = subparsers.add_parser("inspect", help="Print statistics for a maze file")
    inspect_parser.add_argument("input_file", help="Path to maze file")
    inspect_parser.add_argument("--rows", type=int, default=None, help="Expected rows (default: from file)")
    inspect_parser.add_argument("--cols", type=int, default=None, help="Expected columns (default: from file)")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Time generation and solving")
    bench_parser.add_argument("--size", type=int, default=200, help="Benchmark size")
    bench_parser.add_argument("--seed", type=int, default=123, help="Random Seed")

    return parser

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("hexmaze")

    if args.command is None:
        parser.print_help()
        return 0

    logger.debug(f"Running command: {args.command}")

    try:
        if args.command == "generate":
            return cmd_generate(args, logger)
        elif args.command == "solve":
            return cmd_solve(args, logger)
        elif args.command == "inspect":
            return cmd_inspect(args, logger)
        elif args.command == "benchmark":
            return cmd_benchmark(args, logger)
    except MazeError as exc:
        logger.error(f"{type(exc).__name__}: {exc}")
        return 1
    return 0

def cmd_generate(args, logger) -> int:
    from hexmaze.algo.dfs import generate
    from hexmaze.io.serializer import MazeSerializer

    logger.info(f"Generating {args.rows}x{args.cols} maze (seed={args.seed})...")
    grid = generate(args.rows, args.cols, seed=args.seed)

    logger.info(f"Saving maze to {args.output_file}...")
    MazeSerializer.save(grid, args.output_file)
    logger.info("Save complete.")
    return 0

def cmd_solve(args, logger) -> int:
    from hexmaze.algo.solvers import Trace, TraceMode, solve
    from hexmaze.io.serializer import MazeSerializer, TraceSerializer

    logger.info(f"Loading {args.input_file}...")
    grid = MazeSerializer.load(args.input_file, args.rows, args.cols)

    start = (args.start_row, args.start_col)
    goal = (args.goal_row, args.goal_col)
    mode = TraceMode(args.mode)
    logger.info(f"Solving from {start} to {goal} ({mode.value})...")

    try:
        trace = solve(grid, start, goal, mode)
    except NoPathFound as exc:
        # A full trace is still a record of every visit, even without a path
        if mode is TraceMode.FULL:
            TraceSerializer.save(Trace(mode, exc.trace), args.output_file)
            logger.info(f"Wrote {len(exc.trace)} entries to {args.output_file}")
        raise
    TraceSerializer.save(trace, args.output_file)
    logger.info(f"Wrote {len(trace)} entries to {args.output_file}")
    return 0

def cmd_inspect(args, logger) -> int:
    from hexmaze.core.complexity import MazeInspector
    from hexmaze.io.serializer import MazeSerializer

    grid = MazeSerializer.load(args.input_file, args.rows, args.cols)
    stats = MazeInspector.calculate_stats(grid)

    print(f"Size: {grid.rows}x{grid.cols}")
    for key, value in stats.items():
        print(f"{key:<12} {value}")
    print(f"{'consistent':<12} {MazeInspector.is_consistent(grid)}")
    print(f"{'perfect':<12} {MazeInspector.is_perfect(grid)}")
    return 0

def cmd_benchmark(args, logger) -> int:
    from hexmaze.algo.dfs import generate
    from hexmaze.algo.solvers import TraceMode, solve

    logger.info(f"Running benchmark (Size: {args.size}x{args.size})...")

    t0 = time.time()
    grid = generate(args.size, args.size, seed=args.seed)
    gen_time = time.time() - t0

    start_pos = (0, 0)
    end_pos = (grid.rows - 1, grid.cols - 1)

    print(f"\n{'STEP':<20} | {'TIME (s)':<10} | {'LENGTH':<10}")
    print("-" * 46)
    print(f"{'Generate':<20} | {gen_time:<10.4f} | {grid.rows * grid.cols:<10}")

    for mode in (TraceMode.PRUNED, TraceMode.FULL):
        t_start = time.time()
        trace = solve(grid, start_pos, end_pos, mode)
        duration = time.time() - t_start
        print(f"{'Solve (' + mode.value + ')':<20} | {duration:<10.4f} | {len(trace):<10}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
