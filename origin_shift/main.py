import argparse
import sys
import os
import logging
import random
import time

# Ensure project root is in path so we can import 'origin_shift' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

logger = logging.getLogger("origin_shift")

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def recording_path(prefix: str) -> str:
    import datetime
    if not os.path.exists("recordings"):
        os.makedirs("recordings")
    ts = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    return os.path.join("recordings", f"{prefix}_{ts}.mp4")

def print_maze(maze, args, highlight=None):
    from origin_shift.viz.terminal import dump, render_walls
    if args.paths:
        dump(maze)
    else:
        render_walls(maze, show_arrows=args.arrows, highlight=highlight)

def cmd_generate(args):
    from origin_shift.core.maze import OriginShiftMaze
    from origin_shift.core.events import EventWriter

    # Always record a seed so the maze can be rebuilt later
    seed = args.seed if args.seed is not None else random.randrange(2**31)
    iterations = args.iterations
    if iterations is None:
        from origin_shift.core.maze import DEFAULT_ITERATION_FACTOR
        iterations = args.rows * args.cols * DEFAULT_ITERATION_FACTOR

    logger.info(f"Generating {args.rows}x{args.cols} maze (seed={seed}, iterations={iterations})...")

    evt_writer = None
    if args.record_events:
        evt_writer = EventWriter(args.record_events)
        logger.info(f"Recording events to {args.record_events}...")

    try:
        if args.visual or args.record:
            from origin_shift.algo.origin_shift import OriginShiftGenerator
            from origin_shift.viz.renderer import Renderer

            maze = OriginShiftMaze.create(args.rows, args.cols, seed=seed, iterations=0, event_writer=evt_writer)
            generator = OriginShiftGenerator(maze, iterations=iterations, report_every=1)
            renderer = Renderer(maze, generator=generator, record=args.record, steps_per_frame=args.steps_per_frame)
            if args.record:
                renderer.recorder.output_file = recording_path(f"gen_{args.rows}x{args.cols}")
                logger.info(f"Recording video to {renderer.recorder.output_file}")
            renderer.init_window()
            renderer.run_loop()
            # The window may close before all moves ran
            iterations = generator.step_count
        else:
            t0 = time.time()
            maze = OriginShiftMaze.create(args.rows, args.cols, seed=seed, iterations=iterations, event_writer=evt_writer)
            logger.info(f"Generation complete in {time.time() - t0:.4f}s")
            if not args.quiet:
                print_maze(maze, args)
    finally:
        if evt_writer:
            logger.info(f"Logged {evt_writer.count} shifts")
            evt_writer.close()

    if args.out:
        logger.info(f"Saving maze to {args.out}...")
        from origin_shift.io.serializer import MazeSerializer
        meta = {"seed": seed, "iterations": iterations}
        MazeSerializer.save(maze, args.out, meta=meta, seed_only=args.seed_only, compress=args.compress)
        logger.info("Save complete.")

def cmd_animate(args):
    from origin_shift.core.maze import OriginShiftMaze
    from origin_shift.viz.terminal import animate

    maze = OriginShiftMaze.create(args.rows, args.cols, seed=args.seed, iterations=0)
    animate(maze, frames=args.frames, delay=args.delay, walls=not args.paths, show_arrows=args.arrows)

def cmd_show(args):
    from origin_shift.io.serializer import MazeSerializer
    logger.info(f"Loading {args.input_file}...")
    maze, meta = MazeSerializer.load(args.input_file)
    logger.info(f"Loaded {maze.rows}x{maze.columns} maze. Meta: {meta}")
    print_maze(maze, args)

def cmd_solve(args):
    from origin_shift.io.serializer import MazeSerializer
    from origin_shift.algo.solvers import PathSolver
    from origin_shift.core.wallified import WallifiedView

    maze, meta = MazeSerializer.load(args.input_file)
    start = tuple(args.start) if args.start else (0, 0)
    end = tuple(args.end) if args.end else (maze.rows - 1, maze.columns - 1)

    logger.info(f"Solving from {start} to {end}...")
    solver = PathSolver(maze)
    path = solver.solve(start, end)
    logger.info(f"Path length: {len(path)} (visited {solver.visited_count})")

    trail = WallifiedView.trail(path)
    if args.visual:
        from origin_shift.viz.renderer import Renderer
        renderer = Renderer(maze, highlight=trail)
        renderer.init_window()
        renderer.run_loop()
    else:
        print_maze(maze, args, highlight=trail)

def cmd_stats(args):
    from origin_shift.io.serializer import MazeSerializer
    from origin_shift.core.complexity import MazeStatistics

    maze, _ = MazeSerializer.load(args.input_file)
    stats = MazeStatistics.calculate_stats(maze)
    print(f"{'METRIC':<18} | {'VALUE':<10}")
    print("-" * 31)
    for key, value in stats.items():
        if isinstance(value, float):
            print(f"{key:<18} | {value:<10.2f}")
        else:
            print(f"{key:<18} | {value:<10}")

def cmd_replay(args):
    from origin_shift.core.events import EventReader
    from origin_shift.viz.replay import EventAdapter

    logger.info(f"Replaying {args.event_file}...")
    with EventReader(args.event_file) as reader:
        if args.visual or args.record:
            from origin_shift.viz.renderer import Renderer
            adapter = EventAdapter.from_reader(reader, report_every=1)
            logger.info(f"Log Header: {adapter.maze.rows}x{adapter.maze.columns}")
            renderer = Renderer(adapter.maze, generator=adapter, record=args.record, steps_per_frame=args.steps_per_frame)
            if args.record:
                base_name = os.path.splitext(os.path.basename(args.event_file))[0]
                renderer.recorder.output_file = recording_path(f"replay_{base_name}")
                logger.info(f"Recording replay to {renderer.recorder.output_file}")
            renderer.init_window()
            renderer.run_loop()
        elif args.animate:
            from origin_shift.viz.terminal import animate
            adapter = EventAdapter.from_reader(reader, report_every=1)
            animate(adapter.maze, frames=sys.maxsize, delay=args.delay, walls=not args.paths,
                    show_arrows=args.arrows, generator=adapter)
        else:
            adapter = EventAdapter.from_reader(reader)
            adapter.run_all()
            logger.info(f"Replayed {adapter.step_count} shifts")
            print_maze(adapter.maze, args)

def cmd_benchmark(args):
    from origin_shift.core.maze import OriginShiftMaze

    logger.info(f"Running origin shift benchmark (Size: {args.size}x{args.size})...")
    t0 = time.time()
    maze = OriginShiftMaze.create(args.size, args.size, seed=123)
    duration = time.time() - t0
    iterations = args.size * args.size * 20
    print(f"{'CELLS':<12} | {'ITERATIONS':<12} | {'TIME (s)':<10} | {'STEPS/s':<12}")
    print("-" * 54)
    print(f"{args.size * args.size:<12,} | {iterations:<12,} | {duration:<10.4f} | {iterations / duration:<12,.0f}")
    maze.validate()

def add_display_args(parser):
    parser.add_argument("--paths", action="store_true", help="Print path arrows instead of the wallified maze")
    parser.add_argument("--arrows", action="store_true", help="Show direction arrows on wallified paths")

def main(argv=None):
    parser = argparse.ArgumentParser(description="Origin Shift: perfect maze generator with live re-randomization")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    gen_parser.add_argument("--rows", type=int, default=12, help="Path rows")
    gen_parser.add_argument("--cols", type=int, default=12, help="Path columns")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    gen_parser.add_argument("--iterations", type=int, default=None, help="Origin moves (default rows*cols*20)")
    gen_parser.add_argument("--out", type=str, help="Output file path (optional)")
    gen_parser.add_argument("--compress", action="store_true", help="Compress saved path data")
    gen_parser.add_argument("--seed-only", action="store_true", help="Save seed and iteration count only")
    gen_parser.add_argument("--quiet", "-q", action="store_true", help="Do not print the maze")
    gen_parser.add_argument("--visual", action="store_true", help="Show visualization")
    gen_parser.add_argument("--record", action="store_true", help="Record generation video")
    gen_parser.add_argument("--steps-per-frame", type=int, default=10, help="Origin moves per rendered frame")
    gen_parser.add_argument("--record-events", type=str, help="Save origin moves to binary file")
    add_display_args(gen_parser)

    # Animate Command
    anim_parser = subparsers.add_parser("animate", help="Animate origin shift in the terminal")
    anim_parser.add_argument("--rows", type=int, default=12, help="Path rows")
    anim_parser.add_argument("--cols", type=int, default=12, help="Path columns")
    anim_parser.add_argument("--seed", type=int, default=1, help="Random Seed")
    anim_parser.add_argument("--frames", type=int, default=None, help="Frame count (default rows*cols*8+10)")
    anim_parser.add_argument("--delay", type=float, default=0.002, help="Seconds between frames")
    add_display_args(anim_parser)

    # Show Command
    show_parser = subparsers.add_parser("show", help="Print a saved maze")
    show_parser.add_argument("input_file", help="Path to maze file")
    add_display_args(show_parser)

    # Solve Command
    solve_parser = subparsers.add_parser("solve", help="Find the path between two cells")
    solve_parser.add_argument("input_file", help="Path to maze file")
    solve_parser.add_argument("--start", type=int, nargs=2, metavar=("ROW", "COL"), help="Start cell (default 0 0)")
    solve_parser.add_argument("--end", type=int, nargs=2, metavar=("ROW", "COL"), help="End cell (default last cell)")
    solve_parser.add_argument("--visual", action="store_true", help="Show visualization")
    add_display_args(solve_parser)

    # Stats Command
    stats_parser = subparsers.add_parser("stats", help="Structural statistics of a saved maze")
    stats_parser.add_argument("input_file", help="Path to maze file")

    # Replay Command
    replay_parser = subparsers.add_parser("replay", help="Replay an event log")
    replay_parser.add_argument("event_file", help="Path to event log file")
    replay_parser.add_argument("--visual", action="store_true", help="Show visualization")
    replay_parser.add_argument("--record", action="store_true", help="Record video")
    replay_parser.add_argument("--animate", action="store_true", help="Animate in the terminal")
    replay_parser.add_argument("--delay", type=float, default=0.002, help="Seconds between terminal frames")
    replay_parser.add_argument("--steps-per-frame", type=int, default=10, help="Origin moves per rendered frame")
    add_display_args(replay_parser)

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Time maze generation")
    bench_parser.add_argument("--size", type=int, default=200, help="Benchmark size")

    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return

    logger.debug(f"Running command: {args.command}")

    commands = {
        "generate": cmd_generate,
        "animate": cmd_animate,
        "show": cmd_show,
        "solve": cmd_solve,
        "stats": cmd_stats,
        "replay": cmd_replay,
        "benchmark": cmd_benchmark,
    }
    try:
        commands[args.command](args)
    except (ValueError, OSError) as e:
        logger.error(f"{args.command} failed: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
