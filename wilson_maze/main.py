import argparse
import sys
import os
import logging

# Ensure project root is in path so we can import 'wilson_maze' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Wilson Maze: uniform spanning tree maze generator")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a maze and save it as a PNG")
    gen_parser.add_argument("--width", type=int, default=100, help="Maze Width")
    gen_parser.add_argument("--height", type=int, default=100, help="Maze Height")
    gen_parser.add_argument("--cell-size", type=int, default=25, help="Pixels per cell")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    gen_parser.add_argument("--out", type=str, default="image.png", help="Output PNG path")
    gen_parser.add_argument("--dump", action="store_true", help="Print the final generator state as text")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Time generation at several sizes")
    bench_parser.add_argument("--sizes", type=int, nargs="+", default=[10, 50, 100], help="Square maze sizes")
    bench_parser.add_argument("--seed", type=int, default=123, help="Random Seed")
    return parser

def run_generate(args, logger) -> int:
    import random
    from wilson_maze.algo.wilsons import WilsonsAlgorithm
    from wilson_maze.core.analysis import calculate_stats
    from wilson_maze.io.image import ImageWriter
    from wilson_maze.viz.renderer import MazeRenderer, RenderError

    if args.width < 0 or args.height < 0 or args.cell_size <= 0:
        logger.error(f"Invalid dimensions {args.width}x{args.height} with cell size {args.cell_size}")
        return 2

    logger.info(f"Generating {args.width}x{args.height} maze (seed={args.seed})...")
    rng = random.Random(args.seed)
    generator = WilsonsAlgorithm(args.width, args.height)
    for status in generator.run(rng):
        logger.debug(status)
    maze = generator.emit()
    logger.info(f"Generation complete: {generator.walk_count} walks, {generator.step_count} steps")

    if args.dump:
        print(generator, end="")

    stats = calculate_stats(maze)
    logger.info(f"Stats: {stats}")

    logger.info(f"Rendering to {args.out} ({args.cell_size}px cells)...")
    try:
        surface = MazeRenderer(args.cell_size).render(maze)
        ImageWriter.save(surface, args.out)
    except RenderError as e:
        logger.error(str(e))
        return 1
    logger.info("Save complete.")
    return 0

def run_benchmark(args, logger) -> int:
    import random
    import time
    from wilson_maze.algo.wilsons import WilsonsAlgorithm

    logger.info(f"Running generation benchmark (sizes: {args.sizes})...")
    print(f"\n{'SIZE':<12} | {'TIME (s)':<10} | {'WALKS':<10} | {'STEPS':<10}")
    print("-" * 52)

    for size in args.sizes:
        generator = WilsonsAlgorithm(size, size)
        t_start = time.time()
        generator.generate(random.Random(args.seed))
        duration = time.time() - t_start

        label = f"{size}x{size}"
        print(f"{label:<12} | {duration:<10.4f} | {generator.walk_count:<10} | {generator.step_count:<10}")
    return 0

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("wilson_maze")

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    if args.command == "generate":
        return run_generate(args, logger)
    elif args.command == "benchmark":
        return run_benchmark(args, logger)
    return 0

if __name__ == "__main__":
    sys.exit(main())
