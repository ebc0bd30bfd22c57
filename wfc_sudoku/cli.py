"""Command-line interface for the wave-function-collapse Sudoku solver."""

import argparse
import json
import logging
import os
import sys
from typing import Optional, Tuple

from .config import SolverConfig
from .core.errors import FormatError
from .core.parser import load_grid
from .generator import SudokuGenerator, Difficulty
from .benchmark import Benchmark
from .benchmark.visualizer import Visualizer
from .render.text import render_step
from .render.plot import record_frames, save_animation
from .solvers import Outcome, SolveSession, StepResult

EXIT_OK = 0
EXIT_BAD_INPUT = 1
EXIT_UNSOLVED = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="wfc-sudoku",
        description="Sudoku solver based on wave function collapse",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve a puzzle file
  wfc-sudoku solve puzzle.txt --seed 7

  # Step through a solve interactively (Enter = step, r = reset, c = run, q = quit)
  wfc-sudoku step puzzle.txt

  # Record the solve as an animated GIF
  wfc-sudoku animate puzzle.txt --output solve.gif
        """
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging and detailed statistics"
    )

    solving = argparse.ArgumentParser(add_help=False)
    solving.add_argument("file", help="Puzzle file: nine lines of digits, 0 or . for blanks")
    solving.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for the collapse order"
    )
    solving.add_argument(
        "--no-singles", action="store_true",
        help="Only eliminate candidates; do not fix cells left with one candidate"
    )
    solving.add_argument(
        "--max-steps", type=int, default=None,
        help="Give up after this many steps"
    )
    solving.add_argument(
        "--config", "-c", type=str, default=None,
        help="JSON file with solver settings (command-line flags take precedence)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Solve command
    subparsers.add_parser("solve", parents=[common, solving], help="Solve a puzzle file")

    # Step command
    step_parser = subparsers.add_parser(
        "step", parents=[common, solving], help="Step through a solve interactively"
    )
    step_parser.add_argument(
        "--compact", action="store_true",
        help="Print the plain board instead of every cell's candidates"
    )

    # Animate command
    anim_parser = subparsers.add_parser(
        "animate", parents=[common, solving], help="Save the solve as an animated GIF"
    )
    anim_parser.add_argument(
        "--output", "-o", type=str, default="solve.gif",
        help="Output GIF path (default: solve.gif)"
    )
    anim_parser.add_argument(
        "--max-frames", type=int, default=300,
        help="Maximum number of steps to record (default: 300)"
    )
    anim_parser.add_argument(
        "--duration", type=int, default=150,
        help="Milliseconds per frame (default: 150)"
    )

    # Generate command
    gen_parser = subparsers.add_parser("generate", parents=[common], help="Generate Sudoku puzzles")
    gen_parser.add_argument(
        "--count", "-n", type=int, default=5,
        help="Number of puzzles to generate (default: 5)"
    )
    gen_parser.add_argument(
        "--difficulty", "-d",
        choices=["easy", "medium", "hard", "expert", "all"],
        default="medium",
        help="Difficulty level (default: medium)"
    )
    gen_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Output file for puzzles (JSON format)"
    )
    gen_parser.add_argument(
        "--folder", type=str, default="puzzles",
        help="Folder for individual puzzle files when no --output is given (default: puzzles)"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", parents=[common], help="Run solver benchmarks")
    bench_parser.add_argument(
        "--puzzles", "-n", type=int, default=10,
        help="Puzzles per difficulty (default: 10)"
    )
    bench_parser.add_argument(
        "--difficulty", "-d",
        choices=["easy", "medium", "hard", "expert", "all"],
        default="all",
        help="Difficulty to benchmark (default: all)"
    )
    bench_parser.add_argument(
        "--runs", "-r", type=int, default=3,
        help="Seeds tried per puzzle (default: 3)"
    )
    bench_parser.add_argument(
        "--timeout", "-t", type=float, default=60.0,
        help="Seconds allowed per solve (default: 60)"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--seed", "-s", type=int, default=42,
        help="Random seed for reproducibility (default: 42)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_BAD_INPUT

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "solve": cmd_solve,
        "step": cmd_step,
        "animate": cmd_animate,
        "generate": cmd_generate,
        "benchmark": cmd_benchmark,
    }
    return commands[args.command](args)


def _parse_difficulties(name: str):
    if name == "all":
        return list(Difficulty)
    return [Difficulty(name)]


def _load_config(args) -> SolverConfig:
    """Settings from --config, overridden by explicit flags."""
    config = SolverConfig.from_json(args.config) if args.config else SolverConfig()
    if args.seed is not None:
        config.seed = args.seed
    if args.no_singles:
        config.auto_fix_singles = False
    if args.max_steps is not None:
        config.max_steps = args.max_steps
    return config


def _load_puzzle(args):
    """
    Load settings and the puzzle file.

    Returns:
        (config, grid), or None after reporting a read/parse failure.
    """
    try:
        config = _load_config(args)
    except (OSError, ValueError) as e:
        print(f"Error: could not load configuration `{args.config}`: {e}", file=sys.stderr)
        return None

    try:
        grid = load_grid(args.file, config.blank_markers)
    except (OSError, FormatError) as e:
        print(f"Error: could not read puzzle `{args.file}`: {e}", file=sys.stderr)
        return None

    return config, grid


def _start_session(args) -> Optional[Tuple[SolverConfig, SolveSession]]:
    loaded = _load_puzzle(args)
    if loaded is None:
        return None
    config, grid = loaded
    session = SolveSession(grid, auto_fix_singles=config.auto_fix_singles, seed=config.seed)
    return config, session


def cmd_solve(args) -> int:
    """Handle the solve command."""
    loaded = _load_puzzle(args)
    if loaded is None:
        return EXIT_BAD_INPUT
    config, grid = loaded

    print("Input puzzle:")
    print(grid)
    print()

    solution, stats = config.make_solver().solve(grid)

    if stats.outcome is Outcome.SOLVED:
        print(f"✓ Solved in {stats.time_seconds:.4f}s")
    elif stats.outcome is Outcome.UNSOLVABLE:
        print(f"✗ Unsolvable: {stats.error}")
    else:
        print(f"✗ Gave up: {stats.error}")

    if args.verbose:
        print(f"  Steps: {stats.steps:,}")
        print(f"  Collapses: {stats.collapses:,}")
        print(f"  Backtracks: {stats.backtracks:,}")
        print(f"  Deepest choice point: {stats.max_depth}")
        print(f"  Cells fixed by propagation: {stats.auto_fixed:,}")
        print(f"  Peak memory: {stats.peak_memory_bytes / 1024:.2f} KB")

    if solution is None:
        return EXIT_UNSOLVED
    print(solution)
    return EXIT_OK


def cmd_step(args) -> int:
    """
    Handle the step command: one step per line read from stdin.

    An empty line advances one step, ``c`` runs to the end (at most
    ``max_steps`` steps when configured), ``r`` resets to the givens and
    ``q`` quits.
    """
    started = _start_session(args)
    if started is None:
        return EXIT_BAD_INPUT
    config, session = started
    superposition = not args.compact

    print(render_step(StepResult(session.state, session.grid), superposition))
    print("Commands: <Enter> step, c run to end, r reset, q quit")

    for line in sys.stdin:
        command = line.strip().lower()
        if command == "q":
            break
        if command == "r":
            session.reset()
            result = StepResult(session.state, session.grid)
        elif command == "c":
            result = session.advance()
            taken = 1
            while not result.state.is_terminal:
                if config.max_steps is not None and taken >= config.max_steps:
                    print(f"Stopped after {taken} steps")
                    break
                result = session.advance()
                taken += 1
        elif command == "":
            result = session.advance()
        else:
            print(f"Unknown command {command!r}")
            continue

        print(render_step(result, superposition))
        if result.state.is_terminal:
            print(f"Puzzle {result.state.value} after {session.collapses} collapses, "
                  f"{session.backtracks} backtracks")

    return EXIT_OK


def cmd_animate(args) -> int:
    """Handle the animate command."""
    started = _start_session(args)
    if started is None:
        return EXIT_BAD_INPUT
    config, session = started

    limit = args.max_frames
    if config.max_steps is not None:
        limit = min(limit, config.max_steps)

    frames = record_frames(session, max_steps=limit)
    print(f"Recorded {len(frames)} frames, assembling GIF...")
    save_animation(frames, args.output, duration_ms=args.duration)
    print(f"Saved: {args.output} (final state: {frames[-1].state.value})")
    return EXIT_OK


def cmd_generate(args) -> int:
    """Handle the generate command."""
    generator = SudokuGenerator(seed=args.seed)
    difficulties = _parse_difficulties(args.difficulty)

    all_puzzles = []

    for difficulty in difficulties:
        print(f"\nGenerating {args.count} {difficulty.value} puzzles...")
        puzzles = generator.generate_batch(args.count, difficulty)

        for i, puzzle in enumerate(puzzles, 1):
            all_puzzles.append({
                "difficulty": difficulty.value,
                "index": i,
                "puzzle": puzzle.to_string(),
                "clues": puzzle.count_fixed()
            })

            print(f"\n--- {difficulty.value.capitalize()} Puzzle {i} ({puzzle.count_fixed()} clues) ---")
            print(puzzle)

        if not args.output:
            diff_dir = os.path.join(args.folder, difficulty.value)
            SudokuGenerator.save_to_folder(puzzles, diff_dir, prefix=f"puzzle_{difficulty.value}")

    if args.output:
        with open(args.output, "w") as f:
            json.dump(all_puzzles, f, indent=2)
        print(f"\nAll puzzles saved to {args.output}")
    else:
        print(f"\nPuzzles saved individually in the '{args.folder}/' directory")

    print(f"\nTotal puzzles generated: {len(all_puzzles)}")
    return EXIT_OK


def cmd_benchmark(args) -> int:
    """Handle the benchmark command."""
    difficulties = _parse_difficulties(args.difficulty)

    print("=" * 60)
    print("WFC SUDOKU BENCHMARK")
    print("=" * 60)
    print(f"Puzzles per difficulty: {args.puzzles}")
    print(f"Difficulties: {[d.value for d in difficulties]}")
    print(f"Seeds per puzzle: {args.runs}")

    benchmark = Benchmark(
        puzzles_per_difficulty=args.puzzles,
        difficulties=difficulties,
        runs_per_puzzle=args.runs,
        timeout_seconds=args.timeout,
        seed=args.seed
    )

    print(f"Configurations: {', '.join(benchmark.solvers.keys())}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    results = benchmark.run()
    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)

    for name, stats in summary["configs"].items():
        print(f"\n{name}:")
        print(f"  Solved: {stats['solved']}/{stats['runs']} ({stats['timeouts']} timed out)")
        print(f"  Mean Collapses: {stats['mean_collapses']:.1f} "
              f"(seed spread {stats['seed_std_collapses']:.1f})")
        print(f"  Mean Backtracks: {stats['mean_backtracks']:.1f} "
              f"(seed spread {stats['seed_std_backtracks']:.1f}, max {stats['max_backtracks']})")

    for difficulty, effect in summary["propagation"].items():
        print(f"\nPlain elimination on {difficulty}: "
              f"{effect['extra_collapses']:+.1f} collapses, "
              f"{effect['extra_backtracks']:+.1f} backtracks per solve")

    benchmark.save_results(args.output)

    if not args.no_charts:
        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        visualizer.generate_summary_table()
        print(f"Charts saved to {args.output}/")
        for chart in charts:
            print(f"  - {os.path.basename(chart)}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
